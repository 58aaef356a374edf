"""Errors raised by the billing services at caller-facing boundaries."""


class ServiceError(Exception):
    """Base error for billing service failures."""


class ValidationError(ServiceError):
    """Raised when input to an operator action is rejected."""


class NotFoundError(ServiceError):
    """Raised when a contract or contract line cannot be found."""
