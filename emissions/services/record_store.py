# emissions/services/record_store.py
"""
Record store: persistence and lookup of vehicles and test results.

Inserts only flush. The caller owns the transaction and commits once, so a
vehicle and its test result are written together or not at all. A rejected
vehicle rolls back the whole transaction; a rejected test result rolls back
only its own savepoint, so the caller can retry with a new certificate number.

Every lookup returns TestResult rows with their vehicle eagerly joined.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emissions.exceptions import ConflictError, NotFoundError
from emissions.models.test_result import TestResult
from emissions.models.vehicle import Vehicle
from emissions.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RECENT_LIMIT = 20


def insert_vehicle(db: Session, vehicle: Vehicle) -> int:
    """Add a vehicle and return its new id. Duplicate plate → ConflictError."""
    plate = vehicle.license_plate
    db.add(vehicle)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Vehicle insert rejected for plate {plate}: {e.orig}")
        raise ConflictError(f"License plate {plate} is already registered ({e.orig})") from e
    return vehicle.id


def insert_test_result(db: Session, test: TestResult) -> int:
    """
    Add a test result and return its new id.
    Unknown vehicle_id → NotFoundError; duplicate certificate number → ConflictError.

    The insert runs inside a savepoint: a rejected row is rolled back on its own
    and the rest of the caller's transaction (the vehicle) stays pending.
    """
    if test.vehicle_id is None or db.get(Vehicle, test.vehicle_id) is None:
        raise NotFoundError(f"Vehicle {test.vehicle_id} not found")

    certificate_number = test.certificate_number
    try:
        with db.begin_nested():
            db.add(test)
            db.flush()
    except IntegrityError as e:
        logger.warning(f"Test result insert rejected for {certificate_number}: {e.orig}")
        raise ConflictError(f"Certificate {certificate_number} could not be saved ({e.orig})") from e
    return test.id


def certificate_number_exists(db: Session, certificate_number: str) -> bool:
    return (
        db.query(TestResult.id)
        .filter(TestResult.certificate_number == certificate_number)
        .first()
    ) is not None


def get_recent(db: Session, limit: int = DEFAULT_RECENT_LIMIT) -> List[TestResult]:
    """Newest-created test results first."""
    return (
        db.query(TestResult)
        .order_by(TestResult.created_at.desc(), TestResult.id.desc())
        .limit(limit)
        .all()
    )


def search(db: Session, query: str) -> List[TestResult]:
    """Test results whose plate or certificate number contains the query."""
    needle = query.strip().upper()
    return (
        db.query(TestResult)
        .join(Vehicle, TestResult.vehicle_id == Vehicle.id)
        .filter(or_(
            Vehicle.license_plate.contains(needle, autoescape=True),
            TestResult.certificate_number.contains(needle, autoescape=True),
        ))
        .order_by(TestResult.created_at.desc(), TestResult.id.desc())
        .all()
    )


def get_by_certificate_number(db: Session, certificate_number: str) -> Optional[TestResult]:
    return (
        db.query(TestResult)
        .filter(TestResult.certificate_number == certificate_number)
        .first()
    )


def get_by_test_id(db: Session, test_id: int) -> Optional[TestResult]:
    return db.get(TestResult, test_id)
