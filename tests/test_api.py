import pytest
from fastapi.testclient import TestClient

from checkout_adapter.api.app import create_app
from checkout_adapter.api.endpoints.health import AVAILABLE_ENDPOINTS
from checkout_adapter.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_adapter.integrations.policy.response_wrappers import ProcessorError
from checkout_adapter.utils.settings import Settings


class ExplodingProcessor(MockCheckoutClient):
    async def retrieve_checkout_session(self, session_id):
        raise RuntimeError("processor client bug")


def _client_for(processor, landing_config, **settings_overrides):
    values = {"stripe_secret_key": "sk_test_dummy", "integrations_mode": "mock", "environment": "production"}
    values.update(settings_overrides)
    app = create_app(Settings(**values), processor=processor, landing_config=landing_config)
    return TestClient(app, raise_server_exceptions=False)


# ---------------------------------------------------------------------------
# create-checkout-session
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("missing", ["amount", "userId", "planId", "planName"])
def test_create_rejects_each_missing_field(client, valid_payload, missing):
    payload = {k: v for k, v in valid_payload.items() if k != missing}

    response = client.post("/create-checkout-session", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields"
    assert body["required"] == ["amount", "userId", "planId", "planName"]
    assert body["received"] == payload


def test_create_echoes_only_present_fields(client):
    response = client.post("/create-checkout-session", json={"userId": "u1", "planName": None, "currency": "usd"})

    assert response.status_code == 400
    assert response.json()["received"] == {"userId": "u1"}


@pytest.mark.parametrize("amount", [0, -1, -0.01, "abc", "12abc", True])
def test_create_rejects_bad_amounts(client, mock_processor, valid_payload, amount):
    response = client.post("/create-checkout-session", json=dict(valid_payload, amount=amount))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid amount"
    assert mock_processor.created_params == []


@pytest.mark.parametrize("amount", [0.004, 1e30, "1e40", 1e300])
def test_create_rejects_amounts_outside_minor_unit_range(client, mock_processor, valid_payload, amount):
    response = client.post("/create-checkout-session", json=dict(valid_payload, amount=amount))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid amount"
    assert mock_processor.created_params == []


def test_create_rejects_structured_identifiers(client, mock_processor, valid_payload):
    response = client.post("/create-checkout-session", json=dict(valid_payload, userId={"a": 1}))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid userId", "received": {"a": 1}, "success": False}
    assert mock_processor.created_params == []


def test_create_submits_minor_units_and_default_currency(client, mock_processor, valid_payload):
    response = client.post("/create-checkout-session", json=valid_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["id"].startswith("cs_test_")
    assert body["url"].endswith(body["id"])

    item = mock_processor.created_params[0].line_items[0]
    assert item.unit_amount == 1999
    assert item.currency == "usd"
    assert item.quantity == 1


def test_create_rounds_half_up(client, mock_processor, valid_payload):
    response = client.post("/create-checkout-session", json=dict(valid_payload, amount=10.005))

    assert response.status_code == 200
    assert mock_processor.created_params[0].line_items[0].unit_amount == 1001


def test_create_uses_origin_header_for_redirects(client, mock_processor, valid_payload):
    client.post("/create-checkout-session", json=valid_payload, headers={"Origin": "https://web.example.org"})

    params = mock_processor.created_params[0]
    assert params.success_url == "https://web.example.org/payment-success?session_id={CHECKOUT_SESSION_ID}"
    assert params.cancel_url == "https://web.example.org/payment-cancel"


def test_create_prefers_configured_frontend_url(mock_processor, landing_config, valid_payload):
    client = _client_for(mock_processor, landing_config, frontend_url="https://app.example.com")

    client.post("/create-checkout-session", json=valid_payload, headers={"Origin": "https://web.example.org"})

    assert mock_processor.created_params[0].cancel_url == "https://app.example.com/payment-cancel"


@pytest.mark.parametrize("raw_body", ["not json", "[1, 2, 3]"])
def test_create_rejects_malformed_bodies(client, raw_body):
    response = client.post(
        "/create-checkout-session",
        content=raw_body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["received"] == {}


def test_create_reports_processor_errors(landing_config, valid_payload):
    failing = MockCheckoutClient(
        fail_with=ProcessorError(
            "Invalid API Key provided: sk_test_****",
            error_type="invalid_request_error",
            details="Invalid API Key provided",
        )
    )
    client = _client_for(failing, landing_config)

    response = client.post("/create-checkout-session", json=valid_payload)

    assert response.status_code == 500
    assert response.json() == {
        "error": "Invalid API Key provided: sk_test_****",
        "type": "invalid_request_error",
        "details": "Invalid API Key provided",
        "success": False,
    }


# ---------------------------------------------------------------------------
# verify-session
# ---------------------------------------------------------------------------

def test_verify_returns_metadata_unchanged(client, mock_processor, valid_payload):
    created = client.post("/create-checkout-session", json=valid_payload).json()

    response = client.get(f"/verify-session/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "status": "unpaid",
        "amount": 19.99,
        "metadata": {"userId": "u1", "planId": "p1", "planName": "Pro", "subscriptionType": "monthly"},
        "success": True,
    }


def test_verify_reflects_completed_payment(client, mock_processor, valid_payload):
    created = client.post("/create-checkout-session", json=valid_payload).json()
    mock_processor.complete_session(created["id"])

    assert client.get(f"/verify-session/{created['id']}").json()["status"] == "paid"


@pytest.mark.parametrize("path", ["/verify-session", "/verify-session/", "/verify-session/%20%20"])
def test_verify_requires_session_id(path, landing_config):
    processor = ExplodingProcessor()
    client = _client_for(processor, landing_config)

    response = client.get(path)

    assert response.status_code == 400
    assert response.json()["error"] == "Missing sessionId"


def test_verify_unknown_session_is_a_processor_error(client):
    response = client.get("/verify-session/cs_test_unknown")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "invalid_request_error"
    assert body["success"] is False


# ---------------------------------------------------------------------------
# catch-all and 404
# ---------------------------------------------------------------------------

def test_unexpected_errors_hide_stack_in_production(landing_config):
    client = _client_for(ExplodingProcessor(), landing_config)

    response = client.get("/verify-session/cs_test_1")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error"
    assert body["message"] == "processor client bug"
    assert "stack" not in body


def test_unexpected_errors_include_stack_in_development(landing_config):
    client = _client_for(ExplodingProcessor(), landing_config, environment="development")

    body = client.get("/verify-session/cs_test_1").json()

    assert "RuntimeError: processor client bug" in body["stack"]


def test_unknown_route_lists_endpoints(client):
    response = client.get("/nonexistent")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Route not found"
    assert body["path"] == "/nonexistent"
    assert body["method"] == "GET"
    assert body["availableEndpoints"] == AVAILABLE_ENDPOINTS


def test_wrong_method_is_reported_as_unknown_route(client):
    response = client.get("/create-checkout-session")

    assert response.status_code == 404
    assert "POST /create-checkout-session" in response.json()["availableEndpoints"]


# ---------------------------------------------------------------------------
# health and diagnostics
# ---------------------------------------------------------------------------

def test_root_banner(client):
    body = client.get("/").json()
    assert body["status"] == "ok"
    assert "POST /create-checkout-session" in body["endpoints"]


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["stripe"] == "configured"
    assert body["environment"] == "production"
    assert "timestamp" in body


def test_diagnostics_never_leak_the_secret(client):
    response = client.get("/test")

    assert response.status_code == 200
    assert response.json()["stripe_configured"] is True
    assert "sk_test_dummy" not in response.text


# ---------------------------------------------------------------------------
# landing pages
# ---------------------------------------------------------------------------

def test_success_page_shows_session_and_redirects_to_app(client):
    response = client.get("/payment-success", params={"session_id": "cs_test_123"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Session: cs_test_123" in response.text
    assert "checkoutapp://payment-success?session_id=cs_test_123" in response.text


def test_cancel_page_redirects_without_session(client):
    response = client.get("/payment-cancel", params={"session_id": "cs_test_123"})

    assert response.status_code == 200
    assert "Payment Cancelled" in response.text
    assert "checkoutapp://payment-cancel" in response.text
    assert "cs_test_123" not in response.text


def test_success_page_escapes_session_id(client):
    response = client.get("/payment-success", params={"session_id": "<script>alert(1)</script>"})

    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;" in response.text
