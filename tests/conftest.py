# tests/conftest.py
"""Shared fixtures: an in-memory database per test and an API client bound to it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from emissions.database import Database
from emissions.main import create_app
from emissions.schemas.vehicle import TestSubmission as Submission


VALID_FORM = {
    "vin": "1HGCM82633A004352",
    "license_plate": "ABC123DE",
    "make": "Toyota",
    "model": "Corolla",
    "year": 2018,
    "owner_name": "Adaeze Okafor",
    "owner_phone": "08031234567",
    "co_level": 3.2,
    "hc_level": 800,
    "nox_level": 2500,
    "pm_level": 1.8,
}


@pytest.fixture
def form():
    """A valid, passing submission form as a plain dict."""
    return dict(VALID_FORM)


@pytest.fixture
def make_submission():
    def _make(**overrides):
        return Submission(**{**VALID_FORM, **overrides})
    return _make


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.initialize()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as client:
        yield client
