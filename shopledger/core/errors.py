"""Domain errors raised by the payment, ledger and integrity services.

Endpoints translate these into HTTP responses; services never catch them.
"""


class LedgerError(Exception):
    """Base class for every domain error."""


class InvalidAmount(LedgerError):
    """Amount is malformed, non-positive, too large or too precise."""


class OverpaymentRejected(InvalidAmount):
    """Amount exceeds the outstanding balance and credit is not allowed."""

    def __init__(self, amount: float, outstanding: float):
        self.amount = amount
        self.outstanding = outstanding
        super().__init__(
            f"Payment of {amount:.2f} exceeds outstanding balance of {outstanding:.2f}"
        )


class NoOutstandingBalance(LedgerError):
    """Payment submitted against an entity that owes nothing."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type.capitalize()} {entity_id} has no outstanding balance")


class NotRunningAccount(LedgerError):
    """Debt adjustments and ledgers only exist for hotel customers."""


class EntityNotFound(LedgerError):
    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type.capitalize()} not found: {entity_id}")


class IntegrityMismatch(LedgerError):
    """A cached aggregate disagrees with the value recomputed from its records."""

    def __init__(self, report):
        self.report = report
        super().__init__("; ".join(report.issues) or "Integrity mismatch")


class StoreUnavailable(LedgerError):
    """The backing store failed. Retrying is left to the caller."""
