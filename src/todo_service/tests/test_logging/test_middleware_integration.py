import json
import logging

from fastapi import FastAPI
from starlette.testclient import TestClient

from todo_service.config.settings import Settings
from todo_service.core.logging.builder import setup_logging
from todo_service.core.logging.middleware import RequestIDMiddleware


def test_request_id_in_response_and_logs(capsys):
    setup_logging(Settings(LOG_FORMAT="json", LOG_LEVEL="INFO", LOG_TO_STDOUT=True, ENV="production"))

    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("todo_service").info("handling hello")
        return {"ok": True}

    try:
        resp = TestClient(app).get("/hello")
        captured = capsys.readouterr()
    finally:
        setup_logging(Settings(LOG_FORMAT="text", LOG_LEVEL="DEBUG", LOG_TO_STDOUT=True, ENV="testing"))

    assert resp.status_code == 200
    rid = resp.headers.get("X-Request-ID")
    assert rid is not None

    lines = []
    for line in captured.err.strip().splitlines():
        try:
            lines.append(json.loads(line))
        except ValueError:
            continue

    assert any(rec.get("request_id") == rid and rec.get("message") == "handling hello" for rec in lines)
