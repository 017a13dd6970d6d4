"""Monday.com GraphQL client for pushing new leads to the sales board"""

import json
import httpx
from visaloan_gateway.config import settings
from visaloan_gateway.domain.models import Lead
from visaloan_gateway.domain.exceptions import CRMAPIError
from visaloan_gateway.utils.phone_utils import format_phone_international

DEFAULT_ITEM_NAME = "신규 고객"  # "new customer"


class MondayClient:
    """Client for the Monday.com board API"""

    def __init__(
        self,
        api_token: str | None = None,
        board_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = settings.monday_api_url
        self.api_token = api_token if api_token is not None else settings.monday_api_token
        self.board_id = board_id if board_id is not None else settings.monday_board_id
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_token and self.board_id)

    def build_column_values(self, lead: Lead) -> dict:
        """Board column payload; phones as +82 numbers"""
        return {
            settings.monday_col_customer_phone: {
                "phone": format_phone_international(lead.customer_phone or ""),
                "countryShortName": "KR",
            },
            settings.monday_col_customer_email: {"email": lead.customer_email, "text": lead.customer_email},
            settings.monday_col_manager_name: lead.manager_name or "",
            settings.monday_col_manager_phone: {
                "phone": format_phone_international(lead.manager_contact or ""),
                "countryShortName": "KR",
            },
        }

    async def create_lead_item(self, lead: Lead) -> str | None:
        """
        Create a board item for a new lead.

        Returns:
            Item id, or None when the client is not configured

        Raises:
            CRMAPIError: On timeout, HTTP errors, or GraphQL errors
        """
        if not self.enabled:
            return None

        query = """
            mutation ($boardId: ID!, $itemName: String!, $columnValues: JSON!) {
              create_item (board_id: $boardId, item_name: $itemName, column_values: $columnValues) {
                id
              }
            }
        """
        variables = {
            "boardId": self.board_id,
            "itemName": lead.customer_name or DEFAULT_ITEM_NAME,
            "columnValues": json.dumps(self.build_column_values(lead)),
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json={"query": query, "variables": variables},
                    headers={"Authorization": self.api_token},
                )
                response.raise_for_status()
                data = response.json()

                if data.get("errors"):
                    raise CRMAPIError(f"Monday.com API error: {data['errors']}")

                return str(data["data"]["create_item"]["id"])

            except httpx.TimeoutException as e:
                raise CRMAPIError(f"Monday.com API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise CRMAPIError(f"Monday.com API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise CRMAPIError(f"Monday.com API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise CRMAPIError(f"Invalid response from Monday.com: {e}") from e
