"""Outbound SMS through the Twilio REST API."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Optional, Tuple

import requests

from ..errors import SmsDeliveryError, ValidationFailure
from ..models.messaging import SmsResult
from ..utils.logging import get_logger

LOGGER = get_logger("services.sms")

PHONE_PATTERN = re.compile(r"^[+]?[1-9]\d{0,15}$", re.ASCII)
MAX_MESSAGE_LENGTH = 1600

TWILIO_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
DEFAULT_TIMEOUT = float(os.getenv("SMS_TIMEOUT_SECONDS", "15"))


def normalize_phone(raw: str) -> str:
    return re.sub(r"\s", "", raw)


def is_valid_phone(raw: str) -> bool:
    return bool(PHONE_PATTERN.match(normalize_phone(raw)))


def validate_sms_payload(payload: Any) -> Tuple[str, str]:
    """Check a decoded request body and return ``(phone, message)``.

    Missing fields are a 400, malformed values a 422.
    """
    if not isinstance(payload, dict):
        raise ValidationFailure("Invalid JSON in request body", status_code=400)
    to = payload.get("to")
    message = payload.get("message")
    if not to or not message:
        raise ValidationFailure("Missing required fields: 'to' and 'message'", status_code=400)
    if not isinstance(to, str) or not isinstance(message, str):
        raise ValidationFailure("Fields 'to' and 'message' must be strings")
    phone = normalize_phone(to)
    if not PHONE_PATTERN.match(phone):
        raise ValidationFailure("Invalid phone number format")
    if not 1 <= len(message) <= MAX_MESSAGE_LENGTH:
        raise ValidationFailure(f"Message must be between 1 and {MAX_MESSAGE_LENGTH} characters")
    return phone, message


class SmsSender:
    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        from_number: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.account_sid = account_sid or os.getenv("TWILIO_ACCOUNT_SID")
        self.auth_token = auth_token or os.getenv("TWILIO_AUTH_TOKEN")
        self.from_number = from_number or os.getenv("TWILIO_PHONE_NUMBER")
        self.timeout = timeout
        self.session = session

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def send(self, to: str, message: str) -> SmsResult:
        """Send ``message`` to an already validated phone number."""
        if not self.configured:
            LOGGER.warning("sms_not_configured")
            raise SmsDeliveryError("SMS service credentials not found", status_code=503)

        url = TWILIO_URL.format(sid=self.account_sid)
        form = {"From": self.from_number, "To": to, "Body": message}
        try:
            resp = (self.session or requests).post(
                url, data=form, auth=(self.account_sid, self.auth_token), timeout=self.timeout
            )
        except requests.RequestException as exc:
            LOGGER.error("sms_connect_failed error=%s", exc)
            raise SmsDeliveryError("Failed to connect to SMS service", status_code=503) from exc

        data = self._json(resp)
        if not resp.ok:
            LOGGER.warning("sms_rejected status=%s code=%s", resp.status_code, data.get("code"))
            raise SmsDeliveryError(
                data.get("message") or "SMS sending failed",
                status_code=422,
                code=data.get("code") or resp.status_code,
            )

        LOGGER.info("sms_sent sid=%s status=%s", data.get("sid"), data.get("status"))
        return SmsResult(message_id=data.get("sid"), status=data.get("status"), to=data.get("to"))

    @staticmethod
    def _json(resp: requests.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}


def send_sms(payload: Any, sender: Optional[SmsSender] = None) -> SmsResult:
    phone, message = validate_sms_payload(payload)
    return (sender or SmsSender()).send(phone, message)


__all__ = ["SmsSender", "send_sms", "validate_sms_payload", "normalize_phone", "is_valid_phone", "PHONE_PATTERN"]
