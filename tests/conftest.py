from pathlib import Path

import pytest

from homescape.db.favorites import reset_favorites_store
from homescape.db.repo import reset_repository
from homescape.db.storage import reset_store
from homescape.models.listing import Listing
from homescape.services.comparison import reset_sessions
from homescape.services.contact_service import reset_contact_service

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(DATA_DIR))
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "storage"))
    monkeypatch.delenv("LISTINGS_FILE", raising=False)
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER"):
        monkeypatch.delenv(name, raising=False)
    reset_repository()
    reset_store()
    reset_favorites_store()
    reset_sessions()
    reset_contact_service()
    yield
    reset_repository()
    reset_store()
    reset_favorites_store()
    reset_sessions()
    reset_contact_service()


def make_listing(**overrides) -> Listing:
    fields = {
        "id": 1,
        "title": "Sample Home",
        "address": "1 Main Street",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "price": 300000,
        "bedrooms": 2,
        "bathrooms": 1,
        "square_feet": 1200,
        "lot_size": 4000,
        "year_built": 1990,
        "property_type": "House",
        "status": "For Sale",
        "images": ["https://example.com/1.jpg"],
    }
    fields.update(overrides)
    return Listing(**fields)
