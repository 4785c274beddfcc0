# Emissions certification: Database Models
# Import all models here for SQLAlchemy discovery

from emissions.models.vehicle import Vehicle            # noqa
from emissions.models.test_result import TestResult     # noqa
