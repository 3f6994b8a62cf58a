"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class MissingYearOrMonthError(ValidationError):
    """Pastorate, financial year or month is absent or malformed."""


class SourceFetchError(RuntimeError):
    """A ledger source query failed or timed out.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, source: str, month: str | None, message: str):
        self.source = source
        self.month = month
        super().__init__(message)


class LedgerInvariantError(RuntimeError):
    """The running balance disagrees with the section totals."""


def church_not_found(church: int | str) -> str:
    """Return message for missing church."""
    if isinstance(church, int):
        return f"Church ID {church} not found"
    return f"Church '{church}' not found"


def unknown_month(month: str | None) -> str:
    """Return message for a month outside the financial year."""
    return f"Unknown month '{month}'. Expected one of April..March"


def malformed_year(label: str | None) -> str:
    """Return message for a financial year label that is not YYYY-YYYY+1."""
    return f"Invalid financial year '{label}'. Expected a label like '2024-2025'"


def missing_pastorate() -> str:
    return "A pastorate name is required"


def opening_balance_locked(month: str) -> str:
    """Return message when the opening balance is edited outside April."""
    return (
        f"Opening balance can only be entered in April; for {month} it is "
        "derived from the previous months"
    )


def fetch_failed(source: str, month: str | None, error: BaseException) -> str:
    """Return message for a failed ledger source query."""
    where = f" for {month}" if month else ""
    return f"Could not load {source}{where}: {error or type(error).__name__}"


def running_balance_mismatch(expected, actual) -> str:
    return (
        f"Running balance {actual} does not match opening + income - expenses "
        f"= {expected}"
    )


def harvest_payment_exceeds_balance(base_entry_id: int, balance) -> str:
    """Return message when a harvest festival payment is over the pledge balance."""
    return (
        f"Amount cannot exceed balance: base entry {base_entry_id} has "
        f"{balance} outstanding"
    )


def amount_precision(what: str, amount) -> str:
    """Return message for an amount finer than one paisa."""
    return f"{what} {amount} has more than two decimal places"
