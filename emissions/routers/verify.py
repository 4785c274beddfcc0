# emissions/routers/verify.py
"""Public certificate verification, the target of the QR code link."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from emissions.database import get_db
from emissions.schemas.test_result import VerificationOut
from emissions.services.verification_service import verify_certificate

router = APIRouter()


@router.get("/verify/{certificate_number}", response_model=VerificationOut, summary="Verify a certificate")
def verify(certificate_number: str, db: Session = Depends(get_db)):
    """Full certificate record plus is_expired and days_until_expiry as of today."""
    return verify_certificate(db, certificate_number)
