# emissions/services/validation.py
"""
Front-desk input checks, applied before a submission reaches the evaluator or the store.
Returns human-readable messages. An empty list means the form is valid.
"""

import re
from datetime import date
from typing import List, Optional

from emissions.schemas.vehicle import TestSubmission

VIN_RE = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")          # 17 chars, no I/O/Q
PLATE_RE = re.compile(r"^[A-Z]{2,3}[0-9]{2,4}[A-Z]{2}$")  # e.g. ABC123DE
PHONE_RE = re.compile(r"^(\+234|0)[7-9][0-1][0-9]{8}$")   # Nigerian mobile

MIN_YEAR = 1980

# Upper bounds of a plausible analyser reading, not the pass limits
EMISSION_SANITY_BOUNDS = {
    "co": 10.0,
    "hc": 5000.0,
    "nox": 10000.0,
    "pm": 10.0,
}


def validate_vin(vin: str) -> bool:
    return bool(VIN_RE.match(vin.upper()))


def validate_license_plate(plate: str) -> bool:
    return bool(PLATE_RE.match(plate.upper()))


def validate_phone_number(phone: str) -> bool:
    return bool(PHONE_RE.match(re.sub(r"\s", "", phone)))


def validate_year(year: int, today: Optional[date] = None) -> bool:
    current_year = (today or date.today()).year
    return MIN_YEAR <= year <= current_year


def validate_emission_level(value: float, pollutant: str) -> bool:
    return 0 <= value <= EMISSION_SANITY_BOUNDS[pollutant]


def validate_submission(data: TestSubmission, today: Optional[date] = None) -> List[str]:
    errors = []

    if not validate_vin(data.vin):
        errors.append("Invalid VIN format. Must be 17 characters long.")
    if not validate_license_plate(data.license_plate):
        errors.append("Invalid license plate format. Use format: ABC123DE")
    if not data.make.strip():
        errors.append("Vehicle make is required.")
    if not data.model.strip():
        errors.append("Vehicle model is required.")
    if not validate_year(data.year, today):
        errors.append("Invalid year. Must be between 1980 and current year.")
    if not data.owner_name.strip():
        errors.append("Owner name is required.")
    if not validate_phone_number(data.owner_phone):
        errors.append("Invalid phone number format. Use Nigerian format: +234XXXXXXXXX or 0XXXXXXXXX")

    for pollutant, label, value in (
        ("co", "CO", data.co_level),
        ("hc", "HC", data.hc_level),
        ("nox", "NOx", data.nox_level),
        ("pm", "PM", data.pm_level),
    ):
        if not validate_emission_level(value, pollutant):
            errors.append(f"Invalid {label} level.")

    return errors
