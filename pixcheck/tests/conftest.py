import json

import pytest

from pixcheck.app import create_app
from pixcheck.config import AppConfig

API_URL = "https://abacate.test/v1"
SUPABASE_URL = "https://project.supabase.test"

ENV = {
    "ABACATEPAY_API_KEY": "abc_test_key",
    "ABACATEPAY_API_URL": API_URL,
    "SUPABASE_URL": SUPABASE_URL,
    "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
}


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def text(self):
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    def json(self):
        if isinstance(self._body, str):
            raise ValueError("not json")
        return self._body


class FakeSession:
    """
    AbacatePay /pixQrCode/check + PostgREST payments/profiles 흉내.
    모든 호출은 self.calls에 (method, table_or_path, params, json) 로 기록.
    """

    def __init__(self):
        self.provider = {}
        self.payments = {}
        self.profiles = {}
        self.calls = []
        self.fail_lookup = False
        self.fail_writes = set()

    # --- test helpers -------------------------------------------------
    def add_payment(self, provider_id, user_id, status="pending"):
        self.payments[provider_id] = {"abacatepay_payment_id": provider_id, "user_id": user_id, "status": status}
        self.profiles.setdefault(user_id, {"id": user_id, "is_premium": False})

    def set_provider(self, payment_id, body, status_code=200):
        self.provider[payment_id] = (status_code, body)

    def writes(self):
        return [c for c in self.calls if c[0] == "PATCH"]

    # --- requests.Session surface -------------------------------------
    def get(self, url, headers=None, params=None, timeout=None):
        params = params or {}
        if url.startswith(API_URL):
            self.calls.append(("GET", "pixQrCode/check", params, None))
            assert headers["Authorization"] == f"Bearer {ENV['ABACATEPAY_API_KEY']}"
            status_code, body = self.provider.get(params["id"], (404, {"message": "Not found"}))
            return FakeResponse(status_code, body)

        if url == f"{SUPABASE_URL}/rest/v1/payments":
            self.calls.append(("GET", "payments", params, None))
            assert headers["apikey"] == ENV["SUPABASE_SERVICE_ROLE_KEY"]
            if self.fail_lookup:
                return FakeResponse(500, {"message": "db down"})
            key = params["abacatepay_payment_id"].replace("eq.", "", 1)
            row = self.payments.get(key)
            rows = [{"user_id": row["user_id"], "status": row["status"]}] if row else []
            return FakeResponse(200, rows)

        raise AssertionError(f"unexpected GET {url}")

    def patch(self, url, headers=None, params=None, json=None, timeout=None):
        params = params or {}
        table = url.rsplit("/", 1)[-1]
        self.calls.append(("PATCH", table, params, json))
        if table in self.fail_writes:
            return FakeResponse(500, {"message": f"{table} write failed"})

        if table == "payments":
            key = params["abacatepay_payment_id"].replace("eq.", "", 1)
            rows = [self.payments[key]] if key in self.payments else []
        elif table == "profiles":
            key = params["id"].replace("eq.", "", 1)
            rows = [self.profiles[key]] if key in self.profiles else []
        else:
            raise AssertionError(f"unexpected PATCH {url}")

        for row in rows:
            row.update(json)

        if headers.get("Prefer") == "return=representation":
            fields = params.get("select", "").split(",")
            return FakeResponse(200, [{f: row.get(f) for f in fields} for row in rows])
        return FakeResponse(204, None)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def make_client(fake_session):
    def _make(env=ENV, **overrides):
        config = AppConfig.from_env(dict(env, **overrides))
        app = create_app(config, session=fake_session)
        app.config["TESTING"] = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
