"""Data access layer for leads"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from visaloan_gateway.infrastructure.database.models import Customer
from visaloan_gateway.domain.models import Lead


class CustomerRepository:
    """Repository for captured leads"""

    def __init__(self, db: Session):
        self.db = db

    def find_existing(self, lead: Lead) -> Optional[Customer]:
        """Match on (name, phone, email); missing name/phone compare as empty strings"""
        return (
            self.db.query(Customer)
            .filter(Customer.name == (lead.customer_name or ""))
            .filter(Customer.phone == (lead.customer_phone or ""))
            .filter(Customer.email == lead.customer_email)
            .first()
        )

    def create_customer(self, lead: Lead) -> Customer:
        """Persist a new lead"""
        db_customer = Customer(
            name=lead.customer_name or "",
            phone=lead.customer_phone or "",
            email=lead.customer_email,
            manager_name=lead.manager_name or None,
            manager_contact=lead.manager_contact or None,
            corridor=lead.corridor or None,
        )
        self.db.add(db_customer)
        self.db.flush()  # Get ID without committing
        return db_customer

    def list_customers(self, corridor: str | None = None, limit: int = 500) -> List[Customer]:
        """Leads newest first, optionally restricted to one manager corridor"""
        query = self.db.query(Customer)
        if corridor:
            query = query.filter(Customer.corridor == corridor)
        return query.order_by(Customer.created_at.desc()).limit(limit).all()

    def count_customers(self, corridor: str | None = None, since: datetime | None = None) -> int:
        """Number of leads, optionally per corridor and created at or after `since`"""
        query = self.db.query(func.count(Customer.id))
        if corridor:
            query = query.filter(Customer.corridor == corridor)
        if since is not None:
            query = query.filter(Customer.created_at >= since)
        return query.scalar()

    def list_corridors(self) -> List[str]:
        """Distinct non-empty corridors present in the lead table"""
        rows = (
            self.db.query(Customer.corridor)
            .filter(Customer.corridor.isnot(None))
            .filter(Customer.corridor != "")
            .distinct()
            .order_by(Customer.corridor)
            .all()
        )
        return [row[0] for row in rows]
