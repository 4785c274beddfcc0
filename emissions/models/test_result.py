# emissions/models/test_result.py
"""
Emissions test results table.
Each row is one test of one vehicle and carries the issued certificate:
its number, verdict, QR payload and validity end date. Re-tests are new rows.

The vehicle columns are exposed as read-only properties so a TestResult
serialises as the joined vehicle + test record.
"""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from emissions.database import Base, utcnow


class TestResult(Base):
    __test__ = False   # not a pytest test class

    __tablename__ = "test_results"
    __table_args__ = (
        CheckConstraint("pass_fail_status IN ('PASS', 'FAIL')", name="ck_test_results_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    test_date = Column(Date, nullable=False)
    co_level = Column(Float, nullable=False)     # % volume
    hc_level = Column(Float, nullable=False)     # ppm
    nox_level = Column(Float, nullable=False)    # ppm
    pm_level = Column(Float, nullable=False)     # mg/m³
    pass_fail_status = Column(String(4), nullable=False)
    certificate_number = Column(String(32), unique=True, nullable=False, index=True)
    qr_code_data = Column(Text, nullable=False)  # data:image/png;base64,...
    validity_period = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    vehicle = relationship("Vehicle", back_populates="test_results", lazy="joined")

    @property
    def vin(self):
        return self.vehicle.vin

    @property
    def license_plate(self):
        return self.vehicle.license_plate

    @property
    def make(self):
        return self.vehicle.make

    @property
    def model(self):
        return self.vehicle.model

    @property
    def year(self):
        return self.vehicle.year

    @property
    def owner_name(self):
        return self.vehicle.owner_name

    @property
    def owner_phone(self):
        return self.vehicle.owner_phone

    def __repr__(self):
        return f"<TestResult {self.id} cert={self.certificate_number} status={self.pass_fail_status}>"
