import requests

from ..config import AbacatePaySettings
from ..utils.logger import log

PAID_STATUSES = ("paid", "completed")


class AbacatePayError(Exception):
    """AbacatePay가 2xx가 아닌 응답을 준 경우"""

    def __init__(self, status_code: int, message: str, details=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


def pix_status(payload):
    """
    최상위 status가 없으면 {"data": {...}} 봉투 안에서 찾는다.
    """
    if not isinstance(payload, dict):
        return None
    if payload.get("status") is not None:
        return payload["status"]
    data = payload.get("data")
    if isinstance(data, dict):
        return data.get("status")
    return None


def is_paid_status(status) -> bool:
    return isinstance(status, str) and status.lower() in PAID_STATUSES


class AbacatePayClient:
    def __init__(self, settings: AbacatePaySettings, session=None, timeout=None):
        self.api_url = settings.api_url
        self.api_key = settings.api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def check_pix_status(self, payment_id: str) -> dict:
        res = self.session.get(
            f"{self.api_url}/pixQrCode/check",
            headers={"Authorization": f"Bearer {self.api_key}"},
            params={"id": payment_id},
            timeout=self.timeout
        )

        if not res.ok:
            try:
                details = res.json()
            except ValueError:
                details = res.text
            message = None
            if isinstance(details, dict):
                message = details.get("message")
            log(f"❌ AbacatePay API 오류 ({res.status_code}): {details}", level="error")
            raise AbacatePayError(res.status_code, message or "Failed to check payment status", details)

        return res.json()
