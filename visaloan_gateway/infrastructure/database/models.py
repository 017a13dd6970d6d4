"""SQLAlchemy ORM models for captured leads"""

import uuid
from sqlalchemy import Column, DateTime, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Customer(Base):
    """Lead submitted from the calculator's email flow"""

    __tablename__ = "customers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=False, index=True)
    manager_name = Column(Text, nullable=True)
    manager_contact = Column(Text, nullable=True)
    corridor = Column(Text, nullable=True, index=True)  # assigned manager's nationality
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
