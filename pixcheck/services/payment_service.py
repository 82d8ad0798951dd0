import requests

from ..responses import StatusCheckBody
from ..utils.logger import log
from ..utils.supabase_utils import SupabaseError
from .abacatepay_service import pix_status, is_paid_status

COMPLETED = "completed"


def best_effort(description: str, action, *args):
    """
    실패해도 응답에는 영향 없음. 로그만 남긴다.
    """
    try:
        return action(*args)
    except Exception as e:
        log(f"⚠️ {description} 실패 (무시): {e}", level="error", exc_info=True)
        return None


def find_payment(store, payment_id: str):
    try:
        return store.get_payment_by_provider_id(payment_id)
    except (SupabaseError, requests.RequestException, ValueError) as e:
        log(f"결제 조회 실패 → 업데이트 생략: {payment_id} ({e})", level="warning")
        return None


def complete_payment(store, payment_id: str) -> bool:
    """
    provider 기준 결제 완료 → 로컬 결제 completed + 사용자 premium.
    이미 completed이거나 조회 실패 시 아무것도 쓰지 않는다.
    """
    payment = find_payment(store, payment_id)
    if not payment:
        log(f"로컬 결제 없음: {payment_id}", level="warning")
        return False
    if payment.get("status") == COMPLETED:
        log(f"이미 완료된 결제: {payment_id}", level="debug")
        return False

    user_id = payment.get("user_id")
    best_effort(
        f"결제 상태 업데이트 ({payment_id})",
        store.update_payment, payment_id, {"status": COMPLETED}
    )
    best_effort(
        f"premium 업데이트 ({user_id})",
        store.update_profile, user_id, {"is_premium": True}
    )
    log(f"✅ 결제 완료 → premium 전환: {user_id}")
    return True


def check_payment_status(payment_id, provider, store) -> StatusCheckBody:
    """
    payment_id는 요청에서 받은 값 그대로 응답에 돌려준다.
    조회 / DB 필터에는 문자열로 변환해서 사용.
    """
    lookup_id = str(payment_id)
    log(f"AbacatePay 결제 상태 조회: {lookup_id}")
    provider_data = provider.check_pix_status(lookup_id)
    log(f"AbacatePay 응답: {provider_data}")

    status = pix_status(provider_data)
    if is_paid_status(status):
        complete_payment(store, lookup_id)

    return StatusCheckBody(payment_id=payment_id, status=status, provider_data=provider_data)
