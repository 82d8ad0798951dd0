import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ABACATEPAY_API_URL = "https://api.abacatepay.com/v1"
DEFAULT_HTTP_TIMEOUT = 15.0

ABACATEPAY_VARS = ("ABACATEPAY_API_KEY",)
SUPABASE_VARS = ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")


class ConfigError(Exception):
    """필수 환경변수 누락 / 잘못된 값"""

    def __init__(self, missing=(), message="Missing environment variables"):
        super().__init__(message)
        self.missing = tuple(missing)


@dataclass(frozen=True)
class AbacatePaySettings:
    api_key: str
    api_url: str = DEFAULT_ABACATEPAY_API_URL


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    service_role_key: str

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1"


def _flag(value, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppConfig:
    """
    프로세스당 한 번 만들어서 create_app()에 넘기는 설정 묶음.
    누락된 값은 생성 시점에 기록만 하고, 실제로 필요한 핸들러가
    require_*()를 호출할 때 ConfigError로 올린다.
    """
    abacatepay: AbacatePaySettings = None
    supabase: SupabaseSettings = None
    missing: tuple = ()
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    expose_error_stack: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "AppConfig":
        env = os.environ if environ is None else environ

        def get(name):
            value = env.get(name)
            return value.strip() if value and value.strip() else None

        missing = [name for name in ABACATEPAY_VARS + SUPABASE_VARS if not get(name)]

        abacatepay = None
        if get("ABACATEPAY_API_KEY"):
            api_url = (get("ABACATEPAY_API_URL") or DEFAULT_ABACATEPAY_API_URL).rstrip("/")
            abacatepay = AbacatePaySettings(api_key=get("ABACATEPAY_API_KEY"), api_url=api_url)

        supabase = None
        if get("SUPABASE_URL") and get("SUPABASE_SERVICE_ROLE_KEY"):
            supabase = SupabaseSettings(
                url=get("SUPABASE_URL").rstrip("/"),
                service_role_key=get("SUPABASE_SERVICE_ROLE_KEY"),
            )

        raw_timeout = get("PIXCHECK_HTTP_TIMEOUT")
        try:
            http_timeout = float(raw_timeout) if raw_timeout else DEFAULT_HTTP_TIMEOUT
        except ValueError:
            raise ConfigError(message=f"Invalid PIXCHECK_HTTP_TIMEOUT: {raw_timeout!r}")

        return cls(
            abacatepay=abacatepay,
            supabase=supabase,
            missing=tuple(missing),
            http_timeout=http_timeout,
            expose_error_stack=_flag(env.get("PIXCHECK_EXPOSE_ERROR_STACK"), True),
            log_level=(get("LOG_LEVEL") or "INFO").upper(),
        )

    def require_abacatepay(self) -> AbacatePaySettings:
        if self.abacatepay is None:
            raise ConfigError([name for name in self.missing if name in ABACATEPAY_VARS])
        return self.abacatepay

    def require_supabase(self) -> SupabaseSettings:
        if self.supabase is None:
            raise ConfigError([name for name in self.missing if name in SUPABASE_VARS])
        return self.supabase
