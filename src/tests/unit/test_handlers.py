"""Unit tests for the FastAPI error handlers, middleware and system routes."""

from datetime import datetime, timedelta

from loguru import logger

from src.shared.errors import (
    BaseError,
    InternalError,
    ServiceUnavailableError,
    UnauthenticatedError,
    public_message,
    use_locale,
)


class TestPublicMessage:
    """Tests for the user-visible message selection."""

    def test_user_error_exposes_localized_message(self):
        """Test user-caused errors expose their localized message."""
        error = UnauthenticatedError()
        assert public_message(error) == error.localized_message

    def test_system_error_hides_internals(self):
        """Test system-caused errors fall back to the generic message."""
        error = InternalError("error.db", "password=hunter2 rejected by db-1")
        assert public_message(error) == "Internal server error."

    def test_uncategorized_error_hides_internals(self):
        """Test uncategorized errors are treated as system-caused."""
        assert public_message(BaseError("error.x", "secret")) == "Internal server error."

    def test_system_error_with_catalog_text(self, catalog):
        """Test catalog text for a system error may be shown."""
        with use_locale("en"):
            error = ServiceUnavailableError()
        assert public_message(error) == "The service is busy, try again later."


class TestErrorResponses:
    """Tests for HTTP responses produced from errors."""

    def test_user_caused_error(self, client):
        """Test a user-caused error keeps its status, code and message."""
        response = client.get("/test/unauthenticated", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 401
        assert response.headers["X-Error-Code"] == "error.unauthenticated"
        assert response.headers["X-Request-ID"] == "req-1"
        body = response.json()
        assert body["error"] == "error.unauthenticated"
        assert body["message"] == (
            '{"errorcode":"error.unauthenticated","errormsg":"Not authenticated."}'
        )
        assert body["trace_id"] == "req-1"

    def test_system_caused_error(self, client):
        """Test a system-caused error hides its internal message."""
        response = client.get("/test/system")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "error.db"
        assert body["message"] == "Internal server error."
        assert "db-1" not in response.text

    def test_uncategorized_error(self, client):
        """Test an uncategorized error is answered like a system error."""
        response = client.get("/test/uncategorized")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error."
        assert "secret" not in response.text

    def test_unhandled_exception(self, client):
        """Test unexpected exceptions become internal errors."""
        response = client.get("/test/crash")

        assert response.status_code == 500
        assert response.headers["X-Error-Code"] == "error.internal"
        body = response.json()
        assert body["error"] == "error.internal"
        assert body["message"] == "Internal server error."
        assert body["details"] == {}
        assert "boom" not in response.text

    def test_unhandled_exception_keeps_request_context(self, client):
        """Test crash responses and their log carry the request ID."""
        records: list[dict] = []
        handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
        try:
            response = client.get("/test/crash", headers={"X-Request-ID": "req-9"})
        finally:
            logger.remove(handler_id)

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req-9"
        assert response.json()["trace_id"] == "req-9"

        failures = [r for r in records if r["extra"].get("event") == "error.system"]
        assert len(failures) == 1
        assert failures[0]["extra"]["request_id"] == "req-9"
        assert failures[0]["extra"]["chain"][:2] == ["InternalError", "RuntimeError"]

    def test_request_validation_error(self, client):
        """Test invalid request bodies become invalid input."""
        response = client.post("/test/echo", json={"wrong": "field"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "error.invalid_input"
        assert body["details"]["errors"]
        assert body["details"]["errors"][0]["loc"] == ["body", "text"]

    def test_http_exception(self, client):
        """Test unknown routes use the HTTP error code."""
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "error.http.404"
        assert response.headers["X-Error-Code"] == "error.http.404"

    def test_successful_request(self, client):
        """Test normal requests get a generated request ID."""
        response = client.post("/test/echo", json={"text": "hello"})

        assert response.status_code == 200
        assert response.json() == {"text": "hello"}
        assert response.headers["X-Request-ID"]
        assert "Content-Language" not in response.headers


class TestLocalizedResponses:
    """Tests for responses with a message catalog loaded from disk."""

    def test_default_locale(self, localized_client):
        """Test the default locale is used without Accept-Language."""
        response = localized_client.get("/test/unauthenticated")

        assert response.status_code == 401
        assert response.json()["message"] == "Please sign in to continue."
        assert response.headers["Content-Language"] == "en"

    def test_negotiated_locale(self, localized_client):
        """Test the Accept-Language header selects the bundle."""
        response = localized_client.get(
            "/test/unauthenticated", headers={"Accept-Language": "fr;q=0.9, de-DE;q=0.8"}
        )

        assert response.json()["message"] == "Bitte melden Sie sich an."
        assert response.headers["Content-Language"] == "de"

    def test_code_without_catalog_text(self, localized_client):
        """Test system errors without catalog text stay generic."""
        response = localized_client.get("/test/system", headers={"Accept-Language": "de"})
        assert response.json()["message"] == "Internal server error."


    def test_unhandled_exception_negotiated_locale(self, localized_client):
        """Test crash responses keep the negotiated locale."""
        response = localized_client.get("/test/crash", headers={"Accept-Language": "de"})

        assert response.status_code == 500
        assert response.headers["Content-Language"] == "de"
        assert response.json()["message"] == "Internal server error."


class TestSystemRoutes:
    """Tests for the observability router."""

    def test_health(self, client):
        """Test health without a catalog."""
        response = client.get("/observability/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dependencies"] == {"message_catalog": "pass-through"}
        assert datetime.fromisoformat(body["timestamp"]).utcoffset() == timedelta(0)

    def test_health_with_catalog(self, localized_client):
        """Test health lists catalog locales."""
        body = localized_client.get("/observability/health").json()
        assert body["dependencies"] == {"message_catalog": "de,en,pt-br"}

    def test_live(self, client):
        """Test liveness."""
        assert client.get("/observability/live").json() == {"alive": True}

    def test_error_types(self, client):
        """Test the registered conditions are listed."""
        response = client.get("/observability/errors")

        assert response.status_code == 200
        by_code = {item["code"]: item for item in response.json()}
        assert by_code["error.unauthenticated"] == {
            "code": "error.unauthenticated",
            "name": "UnauthenticatedError",
            "category": "user",
            "status_code": 401,
            "default_message": "Not authenticated.",
        }
        assert by_code["error.internal"]["category"] == "system"
