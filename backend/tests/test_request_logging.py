import logging

from flask import Flask, jsonify

from api.middleware.request_id import setup_request_id_middleware
from api.middleware.request_logging import setup_request_logging_middleware


def _build_test_app(**config):
    app = Flask(__name__)
    app.config.update(config)

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/rooms", methods=["GET"])
    def rooms():
        return jsonify({"rooms": []})

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({"status": "ok"})

    setup_request_id_middleware(app)
    setup_request_logging_middleware(app)
    return app


def _logged(caplog, path):
    return any(
        f"api_request path={path}" in record.getMessage()
        for record in caplog.records
    )


def test_request_logging_sample_rate(caplog):
    app = _build_test_app(
        REQUEST_LOG_ENABLED=True, REQUEST_LOG_SAMPLE_RATE="1.0", REQUEST_LOG_ENDPOINTS=""
    )
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})

    assert response.status_code == 200
    assert _logged(caplog, "/api/health")
    assert any("request_id=abc-123" in record.getMessage() for record in caplog.records)


def test_request_logging_watchlist(caplog):
    app = _build_test_app(
        REQUEST_LOG_ENABLED=True, REQUEST_LOG_SAMPLE_RATE="0.0", REQUEST_LOG_ENDPOINTS="/api/health"
    )
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        response = client.get("/api/health")

    assert response.status_code == 200
    assert _logged(caplog, "/api/health")


def test_request_logging_skips_unsampled_and_non_api(caplog):
    app = _build_test_app(
        REQUEST_LOG_ENABLED=True, REQUEST_LOG_SAMPLE_RATE="0.0", REQUEST_LOG_ENDPOINTS="/api/rooms"
    )
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        client.get("/api/health")
        client.get("/")

    assert not _logged(caplog, "/api/health")
    assert not _logged(caplog, "/")


def test_request_logging_disabled(caplog):
    app = _build_test_app(REQUEST_LOG_ENABLED=False, REQUEST_LOG_SAMPLE_RATE="1.0")
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        client.get("/api/health")

    assert not _logged(caplog, "/api/health")


def test_request_id_generated_when_missing_or_unsafe():
    app = _build_test_app(REQUEST_LOG_ENABLED=False)
    client = app.test_client()

    generated = client.get("/api/health").headers["X-Request-ID"]
    assert len(generated) == 36

    unsafe = client.get("/api/health", headers={"X-Request-ID": "bad id\twith spaces"})
    assert unsafe.headers["X-Request-ID"] != "bad id\twith spaces"

    echoed = client.get("/api/health", headers={"X-Request-ID": "trace-42"})
    assert echoed.headers["X-Request-ID"] == "trace-42"


def test_search_logs_param_names_not_values(caplog):
    app = _build_test_app(
        REQUEST_LOG_ENABLED=True, REQUEST_LOG_SAMPLE_RATE="0.0", REQUEST_LOG_ENDPOINTS="/api/rooms"
    )
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        client.get("/api/rooms?search=secret+street&city=Pune&lat=18.5&lng=73.8")

    messages = [record.getMessage() for record in caplog.records]
    line = next(m for m in messages if "api_request path=/api/rooms" in m)
    assert "params=city,lat,lng,search" in line
    assert "secret" not in line
    assert "Pune" not in line


def test_no_params_logged_as_dash(caplog):
    app = _build_test_app(REQUEST_LOG_ENABLED=True, REQUEST_LOG_SAMPLE_RATE="1.0")
    client = app.test_client()

    with caplog.at_level(logging.INFO, logger="api.request"):
        client.get("/api/health")

    assert any("params=- " in record.getMessage() for record in caplog.records)
