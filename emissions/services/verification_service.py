# emissions/services/verification_service.py
"""
Public certificate verification.
Looks a certificate up by number and reports whether it is still valid.
Expiry fields depend on today's date, so they are computed on every call
and never stored.
"""

from datetime import date
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from emissions.exceptions import NotFoundError
from emissions.schemas.test_result import TestRecordOut, VerificationOut
from emissions.services import record_store
from emissions.utils.logger import get_logger

logger = get_logger(__name__)


def compute_expiry(validity_end: date, today: date) -> Tuple[bool, int]:
    """Return (is_expired, days_until_expiry). Expired certificates report 0 days."""
    is_expired = today > validity_end
    days_until_expiry = 0 if is_expired else (validity_end - today).days
    return is_expired, days_until_expiry


def verify_certificate(db: Session, certificate_number: str, today: Optional[date] = None) -> VerificationOut:
    test = record_store.get_by_certificate_number(db, certificate_number)
    if not test:
        logger.info(f"Verification miss for certificate {certificate_number}")
        raise NotFoundError(f"Certificate {certificate_number} not found")

    is_expired, days_left = compute_expiry(test.validity_period, today or date.today())
    logger.info(f"Verified {certificate_number}: expired={is_expired} days_left={days_left}")
    record = TestRecordOut.model_validate(test)
    return VerificationOut(**record.model_dump(), is_expired=is_expired, days_until_expiry=days_left)
