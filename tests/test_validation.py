# tests/test_validation.py
"""Unit tests for front-desk input validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date
from emissions.services.validation import (
    validate_emission_level, validate_license_plate, validate_phone_number,
    validate_submission, validate_vin, validate_year,
)

TODAY = date(2026, 10, 19)


class TestFieldValidators:
    @pytest.mark.parametrize("vin", ["1HGCM82633A004352", "1hgcm82633a004352"])
    def test_valid_vin(self, vin):
        assert validate_vin(vin)

    @pytest.mark.parametrize("vin", ["1HGCM82633A00435", "1HGCM82633A0043521", "1HGCM82633I004352", "1HGCM82633O004352"])
    def test_invalid_vin(self, vin):
        assert not validate_vin(vin)

    @pytest.mark.parametrize("plate", ["ABC123DE", "AB12CD", "abc1234de"])
    def test_valid_plate(self, plate):
        assert validate_license_plate(plate)

    @pytest.mark.parametrize("plate", ["A123BC", "ABC12345DE", "ABC-123-DE", "123ABCDE"])
    def test_invalid_plate(self, plate):
        assert not validate_license_plate(plate)

    @pytest.mark.parametrize("phone", ["08031234567", "+2348031234567", "0803 123 4567", "07011234567"])
    def test_valid_phone(self, phone):
        assert validate_phone_number(phone)

    @pytest.mark.parametrize("phone", ["0803123456", "06031234567", "08231234567", "+4478031234567"])
    def test_invalid_phone(self, phone):
        assert not validate_phone_number(phone)

    def test_year_range(self):
        assert validate_year(1980, TODAY)
        assert validate_year(2026, TODAY)
        assert not validate_year(1979, TODAY)
        assert not validate_year(2027, TODAY)

    def test_emission_sanity_bounds(self):
        assert validate_emission_level(0, "co")
        assert validate_emission_level(10.0, "co")
        assert not validate_emission_level(10.1, "co")
        assert not validate_emission_level(-0.1, "hc")
        assert not validate_emission_level(10001, "nox")
        assert validate_emission_level(5000, "hc")


class TestValidateSubmission:
    def test_valid_form_has_no_errors(self, make_submission):
        assert validate_submission(make_submission(), TODAY) == []

    def test_lowercase_identifiers_accepted(self, make_submission):
        form = make_submission(vin="1hgcm82633a004352", license_plate="abc123de")
        assert validate_submission(form, TODAY) == []

    def test_blank_required_fields(self, make_submission):
        errors = validate_submission(make_submission(make=" ", model="", owner_name="  "), TODAY)
        assert errors == [
            "Vehicle make is required.",
            "Vehicle model is required.",
            "Owner name is required.",
        ]

    def test_negative_emission_reported_per_pollutant(self, make_submission):
        errors = validate_submission(make_submission(co_level=-1, pm_level=11), TODAY)
        assert errors == ["Invalid CO level.", "Invalid PM level."]

    def test_every_problem_reported(self, make_submission):
        form = make_submission(vin="SHORT", license_plate="X1", year=1975, owner_phone="12345")
        errors = validate_submission(form, TODAY)
        assert len(errors) == 4
        assert errors[0].startswith("Invalid VIN format")
        assert errors[1].startswith("Invalid license plate format")
        assert errors[2].startswith("Invalid year")
        assert errors[3].startswith("Invalid phone number format")
