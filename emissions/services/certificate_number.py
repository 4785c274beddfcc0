# emissions/services/certificate_number.py
"""
Certificate number generator: NIG-<year>-<6 random digits>, e.g. NIG-2026-004217.
Numbers are not unique by construction; the submission flow checks the store
and regenerates on collision (see submission_service).
"""

import random
from datetime import date
from typing import Optional

from emissions.config import settings

RANDOM_DIGITS = 6


def generate_certificate_number(today: Optional[date] = None, rng: Optional[random.Random] = None) -> str:
    today = today or date.today()
    rng = rng or random
    serial = rng.randint(0, 10 ** RANDOM_DIGITS - 1)
    return f"{settings.CERTIFICATE_PREFIX}-{today.year}-{serial:0{RANDOM_DIGITS}d}"
