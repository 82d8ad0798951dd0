import traceback

from flask import Blueprint, request

from ..config import ConfigError
from ..context import get_config, get_session
from ..responses import ErrorBody, UpstreamErrorBody, InternalErrorBody, json_response
from ..services.abacatepay_service import AbacatePayClient, AbacatePayError
from ..services.payment_service import check_payment_status
from ..utils.logger import log
from ..utils.supabase_utils import SupabaseStore

payment_bp = Blueprint("payment", __name__)

ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@payment_bp.route("/check-payment-status", methods=ANY_METHOD)
def check_status():
    config = get_config()
    try:
        try:
            abacatepay = config.require_abacatepay()
            supabase = config.require_supabase()
        except ConfigError as e:
            log(f"❌ 환경변수 누락: {', '.join(e.missing)}", level="error")
            return json_response(ErrorBody(str(e), http_status=500))

        data = request.get_json(force=True)
        payment_id = data.get("paymentId") if isinstance(data, dict) else None
        if not payment_id:
            return json_response(ErrorBody("Missing paymentId", http_status=400))

        session = get_session()
        provider = AbacatePayClient(abacatepay, session, config.http_timeout)
        store = SupabaseStore(supabase, session, config.http_timeout)

        body = check_payment_status(payment_id, provider, store)
        return json_response(body)

    except AbacatePayError as e:
        return json_response(UpstreamErrorBody(e.message, e.details, http_status=e.status_code))

    except Exception as e:
        log(f"❌ check-payment-status 오류: {e}", level="error", exc_info=True)
        if config.expose_error_stack:
            return json_response(InternalErrorBody(str(e), traceback.format_exc()))
        return json_response(InternalErrorBody("Internal server error"))
