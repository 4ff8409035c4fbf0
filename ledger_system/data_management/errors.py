"""Error taxonomy for the fact ledger.

- FactNotFoundError: referenced fact does not exist (client-visible miss)
- InvalidInputError: contract breach rejected before any write
- DanglingReferenceError: a write referenced a row that does not exist
- StorageUnavailableError: the store cannot be reached

Duplicate inserts on idempotent operations are not errors and never reach
callers. Malformed field values surface as pydantic.ValidationError when the
input models are built.
"""


class LedgerError(Exception):
    """Base class for fact ledger errors."""


class FactNotFoundError(LedgerError, LookupError):
    """Referenced fact does not exist."""

    def __init__(self, fact_id: str) -> None:
        super().__init__(f"Fact not found: {fact_id}")
        self.fact_id = fact_id


class InvalidInputError(LedgerError, ValueError):
    """Input violates a write or query contract."""


class DanglingReferenceError(LedgerError):
    """Foreign-key violation: the referenced parent row does not exist."""


class StorageUnavailableError(LedgerError):
    """The relational store cannot be reached."""
