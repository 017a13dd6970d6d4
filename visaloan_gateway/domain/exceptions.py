"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidArgumentError(DomainException):
    """Loan amount, duration or date violates a calculator precondition"""

    pass


class MissingContactError(DomainException):
    """Customer email is required to deliver a quote"""

    pass


class EmailDeliveryError(DomainException):
    """Email provider rejected the message or is unavailable"""

    pass


class CRMAPIError(DomainException):
    """CRM board API returned an error or is unavailable"""

    pass
