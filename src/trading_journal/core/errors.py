"""Custom exception hierarchy for the trading journal."""


class JournalError(Exception):
    """Base exception for all trading journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Validation ---
class TradeValidationError(JournalError):
    """Malformed or incomplete trade input."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class MissingFieldError(TradeValidationError):
    """A required trade field was not supplied."""

    def __init__(self, field: str):
        super().__init__(field, "is required")


class InvalidNumericFieldError(TradeValidationError):
    """A numeric trade field could not be parsed or is out of range."""

    def __init__(self, field: str, value: object, reason: str = "is not a valid number"):
        self.value = value
        super().__init__(field, f"{value!r} {reason}")


class InvalidChoiceError(TradeValidationError):
    """An enumerated trade field holds an unknown value."""

    def __init__(self, field: str, value: object, choices: list[str]):
        self.value = value
        self.choices = choices
        super().__init__(
            field, f"{value!r} is not one of {', '.join(choices)}"
        )


class InvalidDateError(TradeValidationError):
    """The trade date is not an ISO calendar date."""

    def __init__(self, field: str, value: object):
        self.value = value
        super().__init__(field, f"{value!r} is not an ISO date (YYYY-MM-DD)")


# --- Ledger ---
class LedgerError(JournalError):
    """Ledger state error."""


class DuplicateTradeError(LedgerError):
    """A trade with the same id is already in the ledger."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Trade {trade_id} already exists in the ledger")


# --- Storage ---
class StorageError(JournalError):
    """Journal blob store could not be read or written."""


# --- Mentor ---
class MentorError(JournalError):
    """Base for AI mentor failures."""


class MentorConfigurationError(MentorError):
    """Mentor API key is missing or misconfigured."""


class MentorServiceError(MentorError):
    """Mentor service call failed, timed out or returned garbage."""
