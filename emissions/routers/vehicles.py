# emissions/routers/vehicles.py
"""Test submission: registers the vehicle, records the test, issues the certificate."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from emissions.database import get_db
from emissions.schemas.test_result import SubmissionOut
from emissions.schemas.vehicle import TestSubmission
from emissions.services.submission_service import submit_test

router = APIRouter()


@router.post("/vehicles", response_model=SubmissionOut, summary="Submit an emissions test")
def submit_vehicle_test(body: TestSubmission, db: Session = Depends(get_db)):
    """
    Validates the form, evaluates PASS/FAIL and issues a certificate number.
    Vehicle and test result are saved together or not at all.
    """
    return submit_test(db, body)
