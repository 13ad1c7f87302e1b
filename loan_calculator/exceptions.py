"""Exception hierarchy for the loan calculator."""


class LoanCalculatorError(Exception):
    """Base exception for all loan calculator errors."""


class InvalidInputError(LoanCalculatorError, ValueError):
    """Raised when loan inputs cannot produce a payment (e.g. no periods to pay over)."""


class ExportError(LoanCalculatorError):
    """Raised when a schedule cannot be exported in the requested format."""
