import os

import requests
from flask import Flask, request

from . import context
from .config import AppConfig
from .responses import add_cors_headers
from .routes.payment import payment_bp
from .routes.webhook import webhook_bp
from .utils.logger import log, set_level


def answer_preflight():
    # CORS preflight: 어떤 경로든 200 + 빈 body
    if request.method == "OPTIONS":
        return "", 200
    return None


def create_app(config: AppConfig = None, session=None) -> Flask:
    config = config or AppConfig.from_env()
    set_level(config.log_level)
    if config.missing:
        log(f"⚠️ 누락된 환경변수: {', '.join(config.missing)}", level="warning")

    app = Flask(__name__)
    context.init_app(app, config, session or requests.Session())

    app.before_request(answer_preflight)
    app.after_request(add_cors_headers)

    app.register_blueprint(payment_bp)
    app.register_blueprint(webhook_bp)

    @app.route("/")
    def home():
        return "✅ pixcheck 작동 중"

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
