from flask import Blueprint, request

from ..config import ConfigError
from ..context import get_config, get_session
from ..responses import ErrorBody, InternalErrorBody, json_response
from ..services.webhook_service import handle_event
from ..utils.logger import log
from ..utils.supabase_utils import SupabaseStore
from .payment import ANY_METHOD

webhook_bp = Blueprint("webhook", __name__)


@webhook_bp.route("/abacatepay-webhook", methods=ANY_METHOD)
def abacatepay_webhook():
    config = get_config()
    try:
        try:
            supabase = config.require_supabase()
        except ConfigError as e:
            log(f"❌ 환경변수 누락: {', '.join(e.missing)}", level="error")
            return json_response(ErrorBody(str(e), http_status=500))

        payload = request.get_json(force=True)
        store = SupabaseStore(supabase, get_session(), config.http_timeout)
        return json_response(handle_event(payload, store))

    except Exception as e:
        log(f"❌ webhook 오류: {e}", level="error", exc_info=True)
        return json_response(InternalErrorBody(str(e)))
