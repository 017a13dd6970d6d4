"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "visaloan-gateway", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "visaloan-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_quote(
    request_id: str,
    duration: int,
    max_duration: int,
    loan_amount: int,
    tier: str,
    duration_ms: float,
) -> None:
    """Log structured quote outcome for analysis"""
    logging.info(
        "Quote completed",
        extra={
            "request_id": request_id,
            "step": "quote_complete",
            "loan_duration": duration,
            "max_duration": max_duration,
            "loan_amount": loan_amount,
            "tier": tier,
            "duration_ms": duration_ms,
        },
    )


def log_lead(request_id: str, corridor: str | None, created: bool, crm_item_id: str | None) -> None:
    """Log lead capture outcome (contact details are never logged)"""
    logging.info(
        "Lead captured" if created else "Existing lead, skipping save",
        extra={
            "request_id": request_id,
            "step": "lead_capture",
            "corridor": corridor,
            "lead_created": created,
            "crm_item_id": crm_item_id,
        },
    )
