# emissions/schemas/vehicle.py
from pydantic import BaseModel


class TestSubmission(BaseModel):
    """Front-desk form: vehicle + owner fields and the four measured readings."""

    vin: str
    license_plate: str
    make: str
    model: str
    year: int
    owner_name: str
    owner_phone: str
    co_level: float      # % volume
    hc_level: float      # ppm
    nox_level: float     # ppm
    pm_level: float      # mg/m³
