"""Resend email client with exponential backoff retry logic"""

import asyncio
import html
import logging
from dataclasses import dataclass
from typing import Any, Dict
import httpx
from visaloan_gateway.config import settings
from visaloan_gateway.domain.exceptions import EmailDeliveryError
from visaloan_gateway.infrastructure.observability.metrics import email_latency_histogram, email_failure_counter

logger = logging.getLogger(__name__)


@dataclass
class QuoteEmail:
    """Figures and contacts shown in the customer's result email"""

    customer_email: str
    loan_amount: int
    monthly_payment: int
    loan_duration: int
    total_payment: int
    total_interest: int
    customer_name: str = ""
    customer_phone: str = ""
    manager_name: str = ""
    manager_contact: str = ""


def _won(amount: int) -> str:
    return f"{amount:,}원"


def render_quote_email(quote: QuoteEmail) -> str:
    """HTML body of the result email; user-supplied text is escaped"""
    rows = [
        ("Loan Amount", _won(quote.loan_amount)),
        ("Monthly Payment", _won(quote.monthly_payment)),
        ("Loan Duration", f"{quote.loan_duration} months"),
        ("Total Payment", _won(quote.total_payment)),
        ("Total Interest", _won(quote.total_interest)),
    ]
    table = "".join(
        f'<tr><td style="padding: 8px 0; color: #6b7280;">{label}</td>'
        f'<td style="padding: 8px 0; text-align: right; font-weight: 600;">{value}</td></tr>'
        for label, value in rows
    )

    customer_block = ""
    if quote.customer_name or quote.customer_phone:
        customer_block = '<div style="margin: 0 0 20px;">'
        if quote.customer_name:
            customer_block += f"<p><strong>Name:</strong> {html.escape(quote.customer_name)}</p>"
        if quote.customer_phone:
            customer_block += f"<p><strong>Phone:</strong> {html.escape(quote.customer_phone)}</p>"
        customer_block += "</div>"

    manager_block = ""
    if quote.manager_name or quote.manager_contact:
        manager_block = '<div style="margin: 20px 0 0;"><p>Your loan manager</p>'
        if quote.manager_name:
            manager_block += f"<p><strong>{html.escape(quote.manager_name)}</strong></p>"
        if quote.manager_contact:
            manager_block += f"<p>{html.escape(quote.manager_contact)}</p>"
        manager_block += "</div>"

    return (
        '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h1>Your Loan Calculation Result</h1>"
        f"{customer_block}"
        f'<table style="width: 100%; border-collapse: collapse;">{table}</table>'
        f"{manager_block}"
        "</div>"
    )


class EmailClient:
    """Client for sending transactional email through the Resend API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.base_url = base_url or settings.resend_api_base
        self.sender = settings.email_from
        self.max_retries = settings.email_max_retries
        self.backoff_base = settings.email_backoff_base
        self.timeout = settings.http_timeout_seconds
        self.transport = transport

    async def send_quote_email(self, quote: QuoteEmail) -> Dict[str, Any]:
        """
        Email a loan quote to the customer.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s (base * 2^attempt)
        - Retries on 5xx errors and network failures; 4xx fails immediately

        Returns:
            Provider response body (contains the message id)

        Raises:
            EmailDeliveryError: Rejected by the provider or retries exhausted
        """
        payload = {
            "from": self.sender,
            "to": [quote.customer_email],
            "subject": settings.email_subject,
            "html": render_quote_email(quote),
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with email_latency_histogram.time():
                        response = await client.post(f"{self.base_url}/emails", json=payload, headers=headers)
                        response.raise_for_status()
                    return response.json()

                except httpx.HTTPStatusError as e:
                    email_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise EmailDeliveryError(f"Email rejected: {e.response.status_code}") from e
                    error = e

                except httpx.RequestError as e:
                    email_failure_counter.inc()
                    error = e

                attempt += 1
                if attempt >= self.max_retries:
                    raise EmailDeliveryError(f"Email delivery failed after {attempt} attempts") from error

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning("Email attempt %d failed, retrying in %.1fs", attempt, backoff)
                await asyncio.sleep(backoff)
