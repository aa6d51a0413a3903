"""Contact-agent submissions with optional SMS confirmation."""

from __future__ import annotations

import asyncio
import json
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..db.repo import Repo, get_repository
from ..db.storage import KeyValueStore, get_store
from ..errors import HomescapeError, StoreUnavailable, ValidationFailure
from ..models.messaging import ContactReceipt, ContactRequest, ContactSubmission
from ..utils.logging import get_logger
from .sms_service import SmsSender, is_valid_phone, send_sms

LOGGER = get_logger("services.contact")

CONTACTS_KEY = "propertyContacts"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_MESSAGE_LENGTH = 10

SMS_TEMPLATE = (
    "Thank you for your interest in {title}. An agent will contact you within 24 hours. - Homescape Team"
)


def validate_contact(req: ContactRequest) -> None:
    errors: Dict[str, str] = {}
    if not req.name.strip():
        errors["name"] = "Name is required"
    if not req.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(req.email):
        errors["email"] = "Please enter a valid email address"
    if not req.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(req.phone):
        errors["phone"] = "Please enter a valid phone number"
    if not req.message.strip():
        errors["message"] = "Message is required"
    elif len(req.message.strip()) < MIN_MESSAGE_LENGTH:
        errors["message"] = f"Message must be at least {MIN_MESSAGE_LENGTH} characters"
    if errors:
        raise ValidationFailure("Please fix the form errors before submitting", errors=errors)


class ContactService:
    def __init__(
        self,
        storage: KeyValueStore,
        repository: Optional[Repo] = None,
        sender: Optional[SmsSender] = None,
    ) -> None:
        self.storage = storage
        self.repository = repository
        self.sender = sender
        self._lock = asyncio.Lock()

    async def submit(self, req: ContactRequest) -> ContactReceipt:
        validate_contact(req)
        title = None
        if req.property_id is not None:
            repository = self.repository or get_repository()
            title = repository.get_listing(req.property_id).title

        submission = ContactSubmission(
            name=req.name.strip(),
            email=req.email.strip(),
            phone=req.phone,
            message=req.message.strip(),
            enable_sms=req.enable_sms,
            property_id=req.property_id,
            property_title=title,
            timestamp=datetime.now(timezone.utc),
        )

        sms_sent = False
        if req.enable_sms:
            sms_sent = await asyncio.to_thread(self._confirm_by_sms, req.phone, title)

        async with self._lock:
            contacts = self._read()
            contacts.append(submission.model_dump(mode="json"))
            self.storage.set(CONTACTS_KEY, json.dumps(contacts))
        LOGGER.info("contact_stored property_id=%s sms_sent=%s", req.property_id, sms_sent)
        return ContactReceipt(submission=submission, sms_sent=sms_sent)

    async def list_submissions(self) -> List[ContactSubmission]:
        async with self._lock:
            return [ContactSubmission.model_validate(item) for item in self._read()]

    def _confirm_by_sms(self, phone: str, title: Optional[str]) -> bool:
        body = SMS_TEMPLATE.format(title=title or "this property")
        try:
            send_sms({"to": phone, "message": body}, sender=self.sender)
        except HomescapeError as exc:
            # SMS failure never fails the submission
            LOGGER.info("contact_sms_failed error=%s", exc.message)
            return False
        return True

    def _read(self) -> list:
        raw = self.storage.get(CONTACTS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise StoreUnavailable("Stored contact submissions are unreadable") from exc
        if not isinstance(data, list):
            raise StoreUnavailable("Stored contact submissions are not a list")
        return data


_contact_singleton: Optional[ContactService] = None


def get_contact_service() -> ContactService:
    global _contact_singleton
    if _contact_singleton is None:
        _contact_singleton = ContactService(get_store())
    return _contact_singleton


def reset_contact_service() -> None:
    global _contact_singleton
    _contact_singleton = None
