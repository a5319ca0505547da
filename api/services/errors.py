"""
Typed failures raised by the pricing and order lifecycle core.

Every error carries a human-readable message and the HTTP status the API
answers with:
  - NotFoundError   → 404
  - ValidationError → 400
  - ConflictError   → 409
  - DependencyError → 503
"""


class WashError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ── Not found ──────────────────────────────────────────────

class NotFoundError(WashError):
    status_code = 404


class CustomerNotFound(NotFoundError):
    pass


class OrderNotFound(NotFoundError):
    pass


class UnknownService(NotFoundError):
    pass


class StaffNotFound(NotFoundError):
    pass


class SlotNotFound(NotFoundError):
    pass


# ── Validation ─────────────────────────────────────────────

class ValidationError(WashError):
    status_code = 400


class UnknownSubcategory(ValidationError):
    pass


class InvalidQuantity(ValidationError):
    pass


class InvalidPrice(ValidationError):
    pass


class EmptyOrder(ValidationError):
    pass


class NoAddressOnFile(ValidationError):
    pass


class MissingField(ValidationError):
    pass


class InvalidServiceDefinition(ValidationError):
    pass


class InvalidTransition(ValidationError):
    pass


# ── Conflict / dependency ──────────────────────────────────

class ConflictError(WashError):
    status_code = 409


class DependencyError(WashError):
    status_code = 503
