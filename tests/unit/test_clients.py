"""Unit tests for the email and CRM HTTP clients"""

import json
import httpx
import pytest
from visaloan_gateway.domain.exceptions import CRMAPIError, EmailDeliveryError
from visaloan_gateway.domain.models import Lead
from visaloan_gateway.infrastructure.clients.email import EmailClient, QuoteEmail, render_quote_email
from visaloan_gateway.infrastructure.clients.monday import MondayClient


@pytest.fixture
def quote_email() -> QuoteEmail:
    return QuoteEmail(
        customer_email="nguyen@example.com",
        loan_amount=10_000_000,
        monthly_payment=372_000,
        loan_duration=36,
        total_payment=13_392_000,
        total_interest=3_392_000,
        customer_name="Nguyen <b>Van</b> A",
        manager_name="Kim Minsu",
        manager_contact="010-9876-5432",
    )


@pytest.fixture
def lead() -> Lead:
    return Lead(
        customer_email="nguyen@example.com",
        customer_name="Nguyen Van A",
        customer_phone="010-1234-5678",
        manager_name="Kim Minsu",
        manager_contact="010-9876-5432",
        corridor="VN",
    )


def test_render_quote_email(quote_email: QuoteEmail):
    """Test amounts are grouped and user text is escaped"""
    body = render_quote_email(quote_email)

    assert "10,000,000원" in body
    assert "372,000원" in body
    assert "3,392,000원" in body
    assert "36 months" in body
    assert "Nguyen &lt;b&gt;Van&lt;/b&gt; A" in body
    assert "Kim Minsu" in body
    assert "Phone:" not in body


async def test_send_quote_email_success(quote_email: QuoteEmail):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_123"})

    client = EmailClient(api_key="re_test", base_url="https://resend.test", transport=httpx.MockTransport(handler))
    result = await client.send_quote_email(quote_email)

    assert result == {"id": "msg_123"}
    assert captured["url"] == "https://resend.test/emails"
    assert captured["auth"] == "Bearer re_test"
    assert captured["body"]["to"] == ["nguyen@example.com"]
    assert "372,000원" in captured["body"]["html"]


async def test_send_quote_email_retries_server_errors(quote_email: QuoteEmail):
    """Test 5xx responses are retried until success"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={"id": "msg_456"})

    client = EmailClient(api_key="re_test", transport=httpx.MockTransport(handler))
    client.backoff_base = 0
    client.max_retries = 3

    result = await client.send_quote_email(quote_email)

    assert result["id"] == "msg_456"
    assert len(calls) == 3


async def test_send_quote_email_gives_up_after_max_retries(quote_email: QuoteEmail):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = EmailClient(api_key="re_test", transport=httpx.MockTransport(handler))
    client.backoff_base = 0
    client.max_retries = 2

    with pytest.raises(EmailDeliveryError):
        await client.send_quote_email(quote_email)
    assert len(calls) == 2


async def test_send_quote_email_does_not_retry_client_errors(quote_email: QuoteEmail):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(422, json={"message": "invalid from"})

    client = EmailClient(api_key="re_test", transport=httpx.MockTransport(handler))
    client.backoff_base = 0

    with pytest.raises(EmailDeliveryError):
        await client.send_quote_email(quote_email)
    assert len(calls) == 1


async def test_create_lead_item_disabled_without_credentials(lead: Lead):
    client = MondayClient(api_token="", board_id="")
    assert await client.create_lead_item(lead) is None


async def test_create_lead_item_success(lead: Lead):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"create_item": {"id": "98765"}}})

    client = MondayClient(api_token="tok", board_id="123", transport=httpx.MockTransport(handler))
    item_id = await client.create_lead_item(lead)

    assert item_id == "98765"
    assert captured["auth"] == "tok"
    variables = captured["body"]["variables"]
    assert variables["boardId"] == "123"
    assert variables["itemName"] == "Nguyen Van A"
    columns = json.loads(variables["columnValues"])
    assert columns["contact_phone"] == {"phone": "+821012345678", "countryShortName": "KR"}
    assert columns["contact_email"]["email"] == "nguyen@example.com"


async def test_create_lead_item_graphql_error(lead: Lead):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errors": [{"message": "board not found"}]})

    client = MondayClient(api_token="tok", board_id="123", transport=httpx.MockTransport(handler))

    with pytest.raises(CRMAPIError):
        await client.create_lead_item(lead)


async def test_create_lead_item_http_error(lead: Lead):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    client = MondayClient(api_token="tok", board_id="123", transport=httpx.MockTransport(handler))

    with pytest.raises(CRMAPIError):
        await client.create_lead_item(lead)
