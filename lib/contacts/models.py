"""Data models for contact discovery."""

from typing import Optional
from pydantic import BaseModel


class ContactSignals(BaseModel):
    """Raw email/phone strings found on one page, in encounter order."""

    emails: list[str] = []
    phones: list[str] = []


class DiscoveredContacts(BaseModel):
    """Best contacts found across a site's pages."""

    email: Optional[str] = None
    phone: Optional[str] = None
    # Raw homepage markup, scored against the company name
    brand_text: str = ""
    pages_visited: list[str] = []
    emails_seen: list[str] = []
    phones_seen: list[str] = []
