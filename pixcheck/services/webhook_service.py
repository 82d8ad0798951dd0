from datetime import datetime, timezone

import requests

from ..responses import ErrorBody, WebhookAckBody
from ..utils.logger import log
from ..utils.supabase_utils import SupabaseError
from .payment_service import COMPLETED, best_effort

PAID_EVENTS = {
    "billing.paid",
    "payment.paid",
    "pix.paid",
    "payment.completed",
    "pixQrCode.paid",
}
FAILED_EVENTS = {
    "payment.failed",
    "payment.cancelled",
    "pix.expired",
    "pixQrCode.expired",
    "pixQrCode.failed",
}
FAILED = "failed"


def parse_event(payload):
    """
    (event_type, data) 반환. data가 없으면 payload 자체를 data로 본다.
    """
    if not isinstance(payload, dict):
        return None, None
    event_type = payload.get("event") or payload.get("type")
    data = payload.get("data")
    if data is None:
        data = payload
    return event_type, data if isinstance(data, dict) else None


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


def handle_paid(store, payment_id: str):
    log(f"결제 완료 이벤트 처리: {payment_id}")
    now = _now_iso()

    try:
        payment = store.update_payment(
            payment_id, {"status": COMPLETED, "updated_at": now}, returning="user_id"
        )
    except (SupabaseError, requests.RequestException, ValueError) as e:
        log(f"❌ 결제 상태 업데이트 실패: {e}", level="error")
        payment = None

    if not payment:
        return ErrorBody("Failed to update payment status", http_status=500)

    user_id = payment.get("user_id")
    try:
        store.update_profile(user_id, {"is_premium": True, "updated_at": now})
    except (SupabaseError, requests.RequestException) as e:
        log(f"❌ premium 업데이트 실패 ({user_id}): {e}", level="error")
        return ErrorBody("Failed to update user premium status", http_status=500)

    log(f"✅ 결제 {payment_id} 완료 → 사용자 {user_id} premium")
    return WebhookAckBody("Payment processed successfully")


def handle_failed(store, payment_id: str, event_type: str):
    log(f"결제 실패 이벤트 처리: {payment_id} ({event_type})")
    best_effort(
        f"결제 실패 상태 업데이트 ({payment_id})",
        store.update_payment, payment_id, {"status": FAILED, "updated_at": _now_iso()}
    )
    return WebhookAckBody("Payment failure processed")


def handle_event(payload, store):
    event_type, data = parse_event(payload)
    log(f"AbacatePay 이벤트 수신: {event_type}")

    payment_id = data.get("id") if data else None
    if payment_id and event_type in PAID_EVENTS:
        return handle_paid(store, payment_id)
    if payment_id and event_type in FAILED_EVENTS:
        return handle_failed(store, payment_id, event_type)

    log(f"처리하지 않는 이벤트 / 데이터 누락: {event_type} {data}", level="warning")
    return WebhookAckBody("Event type not handled or incomplete data")
