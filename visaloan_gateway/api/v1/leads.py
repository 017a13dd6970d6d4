"""POST /v1/leads/email and GET /v1/leads - lead capture and staff dashboard"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from visaloan_gateway.api.v1.schemas import LeadEmailRequest, LeadEmailResponse, LeadItem, LeadListResponse
from visaloan_gateway.api.dependencies import get_crm_client, get_email_client, get_request_id
from visaloan_gateway.infrastructure.database.session import get_db
from visaloan_gateway.infrastructure.database.repositories import CustomerRepository
from visaloan_gateway.infrastructure.clients.email import EmailClient, QuoteEmail
from visaloan_gateway.infrastructure.clients.monday import MondayClient
from visaloan_gateway.domain.amortization import schedule_totals
from visaloan_gateway.domain.models import Lead
from visaloan_gateway.domain.exceptions import CRMAPIError, EmailDeliveryError, MissingContactError
from visaloan_gateway.infrastructure.observability.metrics import crm_failure_counter, record_lead
from visaloan_gateway.infrastructure.observability.logging import log_lead
from visaloan_gateway.utils.date_utils import day_start_utc
from visaloan_gateway.config import settings

router = APIRouter()


@router.post("/leads/email", response_model=LeadEmailResponse)
async def email_quote(
    request_body: LeadEmailRequest,
    request: Request,
    db: Session = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
    crm_client: MondayClient = Depends(get_crm_client),
):
    """
    Email a loan result to the customer and capture the lead.

    Flow:
    1. Save the lead unless (name, phone, email) is already on file
    2. Push new leads to the CRM board (failures are logged, not fatal)
    3. Send the result email with server-computed totals
    """
    request_id = get_request_id(request)

    try:
        if not request_body.customer_email:
            raise MissingContactError("Customer email is required")

        lead = Lead(
            customer_email=request_body.customer_email,
            customer_name=request_body.customer_name,
            customer_phone=request_body.customer_phone,
            manager_name=request_body.manager_name,
            manager_contact=request_body.manager_contact,
            corridor=request_body.corridor,
        )

        # 1. Insert lead if absent
        customer_repo = CustomerRepository(db)
        created = customer_repo.find_existing(lead) is None
        crm_item_id = None
        if created:
            customer_repo.create_customer(lead)
            db.commit()

            # 2. CRM board item for new leads only
            try:
                crm_item_id = await crm_client.create_lead_item(lead)
            except CRMAPIError as e:
                crm_failure_counter.inc()
                logging.warning(f"CRM sync failed: {e}", extra={"request_id": request_id})

        record_lead(created)
        log_lead(request_id, lead.corridor, created, crm_item_id)

        # 3. Result email
        total_payment, total_interest = schedule_totals(
            request_body.loan_amount, request_body.monthly_payment, request_body.loan_duration
        )
        result = await email_client.send_quote_email(
            QuoteEmail(
                customer_email=lead.customer_email,
                loan_amount=request_body.loan_amount,
                monthly_payment=request_body.monthly_payment,
                loan_duration=request_body.loan_duration,
                total_payment=total_payment,
                total_interest=total_interest,
                customer_name=request_body.customer_name,
                customer_phone=request_body.customer_phone,
                manager_name=request_body.manager_name,
                manager_contact=request_body.manager_contact,
            )
        )

        return LeadEmailResponse(success=True, lead_created=created, message_id=result.get("id"))

    except MissingContactError as e:
        raise HTTPException(status_code=400, detail=str(e))

    except EmailDeliveryError as e:
        logging.error(f"Email delivery failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Failed to send email")

    except HTTPException:
        raise

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/leads", response_model=LeadListResponse)
def list_leads(
    corridor: str | None = Query(None, description="Manager corridor filter; omit or 'all' for every lead"),
    db: Session = Depends(get_db),
):
    """
    Submitted leads for the staff dashboard, newest first.

    Returns:
        Leads, the corridors available as filters, and total/today counts
    """
    if corridor == "all":
        corridor = None

    customer_repo = CustomerRepository(db)
    customers = customer_repo.list_customers(corridor)

    # "Today" follows the business timezone, not the server clock
    today_start = day_start_utc(datetime.now(timezone.utc), settings.dashboard_timezone)

    return LeadListResponse(
        corridor=corridor,
        corridors=customer_repo.list_corridors(),
        total=customer_repo.count_customers(corridor),
        today=customer_repo.count_customers(corridor, since=today_start),
        leads=[
            LeadItem(
                id=str(c.id),
                name=c.name,
                phone=c.phone,
                email=c.email,
                manager_name=c.manager_name,
                manager_contact=c.manager_contact,
                corridor=c.corridor,
                created_at=c.created_at,
            )
            for c in customers
        ],
    )
