# tests/test_emission_evaluator.py
"""Unit tests for the PASS/FAIL threshold evaluator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from emissions.services.emission_evaluator import (
    EMISSION_LIMITS, FAIL, PASS, evaluate_emissions, pollutant_breakdown,
)


class TestEvaluateEmissions:
    def test_typical_clean_vehicle_passes(self):
        assert evaluate_emissions(co=3.2, hc=800, nox=2500, pm=1.8) == PASS

    def test_high_co_fails(self):
        assert evaluate_emissions(co=5.0, hc=800, nox=2500, pm=1.8) == FAIL

    def test_values_exactly_at_limits_pass(self):
        assert evaluate_emissions(co=4.5, hc=1200, nox=3000, pm=2.5) == PASS

    def test_zero_readings_pass(self):
        assert evaluate_emissions(0, 0, 0, 0) == PASS

    @pytest.mark.parametrize("pollutant", ["co", "hc", "nox", "pm"])
    def test_any_single_exceedance_fails(self, pollutant):
        readings = dict(EMISSION_LIMITS)
        readings[pollutant] += 0.01
        assert evaluate_emissions(**readings) == FAIL

    def test_all_exceeded_fails(self):
        assert evaluate_emissions(co=9.9, hc=4000, nox=8000, pm=9.0) == FAIL


class TestPollutantBreakdown:
    def test_rows_in_certificate_order(self):
        rows = pollutant_breakdown(3.2, 800, 2500, 1.8)
        assert [r.key for r in rows] == ["co", "hc", "nox", "pm"]
        assert rows[0].label == "CO (% volume)"
        assert rows[3].unit == "mg/m³"

    def test_per_pollutant_status(self):
        rows = pollutant_breakdown(co=5.0, hc=800, nox=3000, pm=2.6)
        assert [r.status for r in rows] == [FAIL, PASS, PASS, FAIL]

    def test_limits_attached(self):
        rows = pollutant_breakdown(1, 1, 1, 1)
        assert {r.key: r.limit for r in rows} == EMISSION_LIMITS
