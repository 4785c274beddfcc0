# emissions/services/emission_evaluator.py
"""
PASS/FAIL verdict against the fixed regulatory emission limits.
A test passes only if every pollutant is at or below its limit.

  CO   ≤ 4.5  % volume
  HC   ≤ 1200 ppm
  NOx  ≤ 3000 ppm
  PM   ≤ 2.5  mg/m³
"""

from dataclasses import dataclass
from typing import List

PASS = "PASS"
FAIL = "FAIL"

EMISSION_LIMITS = {
    "co": 4.5,
    "hc": 1200.0,
    "nox": 3000.0,
    "pm": 2.5,
}

# (key, label, unit) in certificate table order
POLLUTANTS = (
    ("co", "CO (% volume)", "%"),
    ("hc", "HC (ppm)", "ppm"),
    ("nox", "NOx (ppm)", "ppm"),
    ("pm", "PM (mg/m³)", "mg/m³"),
)


@dataclass(frozen=True)
class PollutantReading:
    key: str
    label: str
    unit: str
    value: float
    limit: float

    @property
    def status(self) -> str:
        return PASS if self.value <= self.limit else FAIL


def evaluate_emissions(co: float, hc: float, nox: float, pm: float) -> str:
    """Return PASS if all four readings are within limits (ties pass), else FAIL."""
    if (co <= EMISSION_LIMITS["co"] and hc <= EMISSION_LIMITS["hc"]
            and nox <= EMISSION_LIMITS["nox"] and pm <= EMISSION_LIMITS["pm"]):
        return PASS
    return FAIL


def pollutant_breakdown(co: float, hc: float, nox: float, pm: float) -> List[PollutantReading]:
    """Per-pollutant rows for the certificate results table."""
    values = {"co": co, "hc": hc, "nox": nox, "pm": pm}
    return [
        PollutantReading(key=key, label=label, unit=unit, value=values[key], limit=EMISSION_LIMITS[key])
        for key, label, unit in POLLUTANTS
    ]
