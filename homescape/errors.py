"""Exception types shared by the stores, services and the HTTP layer."""

from __future__ import annotations

from typing import Dict, Optional


class HomescapeError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(HomescapeError):
    """A listing, favorite or comparison session does not exist."""

    status_code = 404


class ValidationFailure(HomescapeError):
    """Input fields failed format or range checks."""

    status_code = 422

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.errors = dict(errors or {})


class StoreUnavailable(HomescapeError):
    """The dataset or the key-value persistence cannot be read or written."""

    status_code = 503


class SmsDeliveryError(HomescapeError):
    """The SMS gateway is unconfigured, unreachable or refused the message."""

    def __init__(self, message: str, status_code: int = 503, code: Optional[object] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


__all__ = [
    "HomescapeError",
    "NotFound",
    "ValidationFailure",
    "StoreUnavailable",
    "SmsDeliveryError",
]
