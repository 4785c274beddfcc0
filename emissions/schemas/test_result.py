# emissions/schemas/test_result.py
from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class TestRecordOut(BaseModel):
    """A test result joined with its vehicle."""

    id: int
    vehicle_id: int
    test_date: date
    co_level: float
    hc_level: float
    nox_level: float
    pm_level: float
    pass_fail_status: str
    certificate_number: str
    qr_code_data: str
    validity_period: date
    created_at: Optional[datetime]
    vin: str
    license_plate: str
    make: str
    model: str
    year: int
    owner_name: str
    owner_phone: str

    class Config:
        from_attributes = True


class VerificationOut(TestRecordOut):
    is_expired: bool
    days_until_expiry: int


class SubmissionOut(BaseModel):
    success: bool = True
    test_id: int
    vehicle_id: int
    certificate_number: str
    pass_fail_status: str
