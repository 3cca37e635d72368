"""
Custom exceptions for the campaign service.
"""
from typing import Optional


class CampaignEngineError(Exception):
    """Base exception for every error raised by the service."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class StoreError(CampaignEngineError):
    """A customer, campaign or delivery log store call failed."""

    def __init__(
        self,
        message: str,
        stage: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.stage = stage
        details = dict(details or {})
        details["stage"] = stage
        super().__init__(message, details, original_error)


class ValidationError(CampaignEngineError):
    """Invalid input data."""
    pass


class NotFoundError(CampaignEngineError):
    """Resource not found."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None
    ):
        message = f"{resource} not found"
        details = {}
        if identifier:
            details["id"] = identifier
        super().__init__(message, details)


class ConfigurationError(CampaignEngineError):
    """Missing or invalid configuration."""
    pass
