# emissions/exceptions.py
"""
Domain errors raised by the services.
The API layer maps each one to an HTTP status in emissions/main.py.
"""

from typing import List


class EmissionsError(Exception):
    """Base class for all certification errors."""
    pass


class ValidationError(EmissionsError):
    """Submitted form data is malformed or out of range. Never reaches the store."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class NotFoundError(EmissionsError):
    """Unknown test id, certificate number or vehicle reference."""
    pass


class ConflictError(EmissionsError):
    """A uniqueness constraint rejected an insert (plate or certificate number)."""
    pass


class CertificateNumberExhaustedError(ConflictError):
    """Every generated certificate number collided with an existing one."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique certificate number after {attempts} attempts")


class RenderError(EmissionsError):
    """Certificate document could not be generated."""
    pass
