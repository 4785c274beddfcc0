# emissions/services/submission_service.py
"""
Test submission: the front-desk flow that turns a form into an issued certificate.

  1. validate the form (ValidationError, nothing is written)
  2. insert the vehicle
  3. evaluate PASS/FAIL and compute the validity end date
  4. draw a certificate number, encode the QR payload and insert the test
     result, retrying with a fresh number on collision (bounded)
  5. commit both rows in one transaction

Any failure after step 1 rolls the transaction back, so a rejected test
result never leaves an orphan vehicle behind.
"""

import random
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from emissions.config import settings
from emissions.exceptions import CertificateNumberExhaustedError, ConflictError, ValidationError
from emissions.models.test_result import TestResult
from emissions.models.vehicle import Vehicle
from emissions.schemas.test_result import SubmissionOut
from emissions.schemas.vehicle import TestSubmission
from emissions.services import record_store
from emissions.services.certificate_number import generate_certificate_number
from emissions.services.emission_evaluator import evaluate_emissions
from emissions.services.qr_payload import build_verification_payload, encode_qr_data_url
from emissions.services.validation import validate_submission
from emissions.utils.logger import get_logger

logger = get_logger(__name__)


def add_one_year(start: date) -> date:
    """Same calendar date next year; 29 February rolls over to 1 March."""
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        return date(start.year + 1, 3, 1)


def record_test_result(db: Session, vehicle_id: int, submission: TestSubmission, status: str,
                       today: date, validity_end: date, rng: Optional[random.Random] = None):
    """
    Draw certificate numbers until one is both absent from the store and accepted
    by its unique constraint, then return (certificate_number, test_id).

    A number taken by another writer between the check and the insert only rolls
    back that insert's savepoint and costs one attempt.
    """
    plate = submission.license_plate.strip().upper()
    attempts = settings.CERTIFICATE_NUMBER_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        number = generate_certificate_number(today, rng)
        if record_store.certificate_number_exists(db, number):
            logger.warning(f"Certificate number {number} already issued (attempt {attempt}/{attempts})")
            continue

        payload = build_verification_payload(number, plate, today, validity_end, settings.PUBLIC_BASE_URL)
        try:
            test_id = record_store.insert_test_result(db, TestResult(
                vehicle_id=vehicle_id,
                test_date=today,
                co_level=submission.co_level,
                hc_level=submission.hc_level,
                nox_level=submission.nox_level,
                pm_level=submission.pm_level,
                pass_fail_status=status,
                certificate_number=number,
                qr_code_data=encode_qr_data_url(payload),
                validity_period=validity_end,
            ))
        except ConflictError:
            logger.warning(f"Certificate number {number} rejected on insert (attempt {attempt}/{attempts})")
            continue
        return number, test_id
    raise CertificateNumberExhaustedError(attempts)


def submit_test(db: Session, submission: TestSubmission, today: Optional[date] = None,
                rng: Optional[random.Random] = None) -> SubmissionOut:
    today = today or date.today()

    errors = validate_submission(submission, today)
    if errors:
        logger.info(f"Submission rejected for plate {submission.license_plate}: {errors}")
        raise ValidationError(errors)

    plate = submission.license_plate.strip().upper()
    try:
        vehicle_id = record_store.insert_vehicle(db, Vehicle(
            vin=submission.vin.strip().upper(),
            license_plate=plate,
            make=submission.make.strip(),
            model=submission.model.strip(),
            year=submission.year,
            owner_name=submission.owner_name.strip(),
            owner_phone=submission.owner_phone.strip(),
        ))

        status = evaluate_emissions(submission.co_level, submission.hc_level,
                                    submission.nox_level, submission.pm_level)
        validity_end = add_one_year(today)
        certificate_number, test_id = record_test_result(db, vehicle_id, submission, status,
                                                         today, validity_end, rng)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Issued {certificate_number} | Plate={plate} | Status={status} | Valid until {validity_end}")
    return SubmissionOut(
        test_id=test_id,
        vehicle_id=vehicle_id,
        certificate_number=certificate_number,
        pass_fail_status=status,
    )
