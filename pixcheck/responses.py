from dataclasses import dataclass
from flask import jsonify

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, x-client-info, apikey",
}


@dataclass
class StatusCheckBody:
    payment_id: str
    status: object
    provider_data: object
    http_status: int = 200

    def to_dict(self):
        return {
            "paymentId": self.payment_id,
            "status": self.status,
            "abacatePayData": self.provider_data,
        }


@dataclass
class ErrorBody:
    """검증 / 설정 오류: {"error": ...}"""
    error: str
    http_status: int = 400

    def to_dict(self):
        return {"error": self.error}


@dataclass
class UpstreamErrorBody:
    error: str
    details: object
    http_status: int

    def to_dict(self):
        return {"error": self.error, "details": self.details}


@dataclass
class InternalErrorBody:
    error: str
    stack: str = None
    http_status: int = 500

    def to_dict(self):
        body = {"error": self.error}
        if self.stack is not None:
            body["stack"] = self.stack
        return body


@dataclass
class WebhookAckBody:
    message: str
    http_status: int = 200

    def to_dict(self):
        return {"received": True, "message": self.message}


def json_response(body):
    res = jsonify(body.to_dict())
    res.status_code = body.http_status
    return res


def add_cors_headers(res):
    res.headers.update(CORS_HEADERS)
    return res
