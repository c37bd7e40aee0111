"""统一响应接口的集成测试。"""

from fastapi.testclient import TestClient

from app.packages.harmony.core.advice import get_response_advice
from app.packages.harmony.core.config import HarmonyProperties


def test_home_outside_packages_returns_raw_body(client: TestClient):
    response = client.get("/home")

    assert response.status_code == 200
    assert response.text == "home"


def test_book_is_wrapped_into_success_envelope(client: TestClient):
    response = client.get("/order/book")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "code": "code",
        "message": "operation succeeded",
        "data": "book",
    }


def test_book_detail_keeps_structured_data(client: TestClient):
    response = client.get("/order/book/2")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["data"]["title"] == "Fluent Python"


def test_permission_error_becomes_failure_envelope(client: TestClient):
    response = client.get("/personal/account")

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "code": "500",
        "message": "access denied.",
        "data": None,
    }


def test_health_bypasses_interception(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.text == "It's ok!"


def test_health_excluded_even_when_matching_all(client_factory):
    client = client_factory(HARMONY_PACKAGES="")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.text == "It's ok!"


def test_empty_packages_wrap_plain_text_endpoints(client_factory):
    client = client_factory(HARMONY_PACKAGES="")

    payload = client.get("/home").json()

    assert payload["success"] is True
    assert payload["data"] == "home"


def test_disabled_advice_returns_raw_values(client_factory):
    client = client_factory(HARMONY_ENABLED="false")

    assert client.get("/order/book").json() == "book"


def test_envelope_endpoint_is_not_wrapped_twice(client: TestClient):
    payload = client.get("/order/receipt").json()

    assert payload["success"] is True
    assert payload["code"] == "200"
    assert payload["data"]["order_id"] == "A-1001"


def test_http_exception_becomes_failure_envelope(client: TestClient):
    response = client.get("/order/book/404")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "code": "404",
        "message": "book not found",
        "data": None,
    }


def test_validation_error_becomes_failure_envelope(client: TestClient):
    response = client.get("/order/book/not-a-number")

    assert response.status_code == 422
    payload = response.json()
    assert payload["success"] is False
    assert payload["code"] == "422"
    assert payload["data"] is None


def test_unknown_route_uses_envelope(client: TestClient):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_custom_success_defaults(client_factory):
    client = client_factory(RESULT_SUCCESS_CODE="200", RESULT_SUCCESS_MESSAGE="ok")

    payload = client.get("/order/book").json()

    assert (payload["code"], payload["message"]) == ("200", "ok")


def test_reload_applies_to_next_request(app, client: TestClient):
    assert client.get("/home").text == "home"

    get_response_advice(app).reload(HarmonyProperties(packages=("app.packages.harmony.api.endpoints.home",)))

    assert client.get("/home").json()["data"] == "home"
    assert client.get("/order/book").json() == "book"


def test_unhandled_error_hides_details(app):
    def explode() -> str:
        raise RuntimeError("database password leaked")

    app.add_api_route("/explode", explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/explode")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "code": "500",
        "message": "internal server error",
        "data": None,
    }
