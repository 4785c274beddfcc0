# emissions/models/vehicle.py
"""
Tested vehicles table.
One row per vehicle, keyed by its (unique, upper-case) license plate.
Created at test submission, never updated or deleted.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from emissions.database import Base, utcnow


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vin = Column(String(17), nullable=False)
    license_plate = Column(String(20), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    owner_name = Column(String(200), nullable=False)
    owner_phone = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    test_results = relationship("TestResult", back_populates="vehicle")

    def __repr__(self):
        return f"<Vehicle {self.license_plate} {self.make} {self.model} ({self.year})>"
