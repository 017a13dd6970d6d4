"""Prometheus metrics for monitoring quote outcomes, lead capture, and email delivery"""

from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "visaloan_quote_total",
    "Total loan quotes computed",
    ["tier"],  # recommended | medium_risk | ineligible
)

loan_amount_bucket_counter = Counter(
    "visaloan_quote_amount_bucket",
    "Quoted loan amounts by bucket",
    ["bucket"],  # 0, <=10M, 10M-20M, 20M-30M, 30M+
)

# Lead metrics
lead_counter = Counter(
    "visaloan_lead_total",
    "Leads submitted through the email flow",
    ["outcome"],  # created | existing
)

crm_failure_counter = Counter(
    "crm_failures_total",
    "Failed CRM board item creations",
)

# Email metrics
email_latency_histogram = Histogram(
    "email_latency_seconds",
    "Email provider response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

email_failure_counter = Counter(
    "email_failures_total",
    "Failed email delivery attempts",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def amount_bucket(loan_amount: int) -> str:
    if loan_amount == 0:
        return "0"
    elif loan_amount <= 10_000_000:
        return "<=10M"
    elif loan_amount <= 20_000_000:
        return "10M-20M"
    elif loan_amount <= 30_000_000:
        return "20M-30M"
    else:
        return "30M+"


def record_quote(tier: str, loan_amount: int) -> None:
    """Record quote metrics for monitoring tier mix and amount distribution"""
    quote_counter.labels(tier=tier).inc()
    loan_amount_bucket_counter.labels(bucket=amount_bucket(loan_amount)).inc()


def record_lead(created: bool) -> None:
    lead_counter.labels(outcome="created" if created else "existing").inc()
