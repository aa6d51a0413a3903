"""Schemas for the contact-agent flow and SMS gateway responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SmsResult(BaseModel):
    success: bool = True
    message: str = "SMS sent successfully"
    message_id: Optional[str] = None
    status: Optional[str] = None
    to: Optional[str] = None


class ContactRequest(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""
    enable_sms: bool = False
    property_id: Optional[int] = None


class ContactSubmission(BaseModel):
    name: str
    email: str
    phone: str
    message: str
    enable_sms: bool
    property_id: Optional[int] = None
    property_title: Optional[str] = None
    timestamp: datetime


class ContactReceipt(BaseModel):
    submission: ContactSubmission
    sms_sent: bool = False
