"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, HTTPException, Request
from visaloan_gateway.config import settings
from visaloan_gateway.infrastructure.clients.email import EmailClient
from visaloan_gateway.infrastructure.clients.monday import MondayClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_email_client() -> EmailClient:
    """Provide Resend email client instance"""
    return EmailClient()


def get_crm_client() -> MondayClient:
    """Provide Monday.com board client instance"""
    return MondayClient()


def require_table_password(x_table_password: str = Header("", alias="X-Table-Password")) -> None:
    """Gate for the detailed loan table"""
    if x_table_password != settings.loan_table_password:
        raise HTTPException(status_code=403, detail="Invalid table password")
