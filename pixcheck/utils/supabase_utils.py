# 📁 utils/supabase_utils.py
import requests

from ..config import SupabaseSettings


class SupabaseError(Exception):
    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SupabaseStore:
    """
    PostgREST(payments / profiles) 접근.
    service role 키를 apikey, Authorization 양쪽에 실어 보낸다.
    """

    def __init__(self, settings: SupabaseSettings, session=None, timeout=None):
        self.rest_url = settings.rest_url
        self.service_key = settings.service_role_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, prefer=None):
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json"
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def get_payment_by_provider_id(self, provider_id: str):
        """결제 1건 조회. 0건 / 여러 건이면 None (single row 의미)"""
        res = self.session.get(
            f"{self.rest_url}/payments",
            headers=self._headers(),
            params={"select": "user_id,status", "abacatepay_payment_id": f"eq.{provider_id}"},
            timeout=self.timeout
        )
        if res.status_code != 200:
            raise SupabaseError("payment lookup failed", res.status_code, res.text)

        rows = res.json()
        return rows[0] if len(rows) == 1 else None

    def update_payment(self, provider_id: str, fields: dict, returning: str = None):
        params = {"abacatepay_payment_id": f"eq.{provider_id}"}
        prefer = None
        if returning:
            params["select"] = returning
            prefer = "return=representation"

        res = self.session.patch(
            f"{self.rest_url}/payments",
            headers=self._headers(prefer),
            params=params,
            json=fields,
            timeout=self.timeout
        )
        if res.status_code not in [200, 204]:
            raise SupabaseError("payment update failed", res.status_code, res.text)

        if returning:
            rows = res.json()
            return rows[0] if len(rows) == 1 else None
        return None

    def update_profile(self, user_id: str, fields: dict):
        res = self.session.patch(
            f"{self.rest_url}/profiles",
            headers=self._headers(),
            params={"id": f"eq.{user_id}"},
            json=fields,
            timeout=self.timeout
        )
        if res.status_code not in [200, 204]:
            raise SupabaseError("profile update failed", res.status_code, res.text)
