"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class SourceReadError(DomainError):
    """The transaction file could not be opened or read at all.

    Unlike ParseError this is fatal: the run is aborted.
    """


class ParseError(ValidationError):
    """A single input line could not be turned into a transaction.

    Attributes:
        line_number: 1-based line number in the source
        code: Short machine-readable error kind
    """

    code = "parse_error"

    def __init__(self, line_number: int, message: str):
        super().__init__(message)
        self.line_number = line_number
        self.message = message

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}"


class BlankLineError(ParseError):
    code = "blank_line"


class FieldCountError(ParseError):
    code = "field_count"


class MissingFieldError(ParseError):
    code = "missing_field"


class InvalidOperationKindError(ParseError):
    code = "invalid_operation_kind"


class TimestampLengthError(ParseError):
    code = "timestamp_length"


class TimestampFormatError(ParseError):
    code = "timestamp_format"


class AmountFormatError(ParseError):
    code = "amount_format"


class NonPositiveAmountError(ParseError):
    code = "non_positive_amount"


def field_count_mismatch(expected: int, found: int) -> str:
    """Return message for a line with too few columns."""
    return f"Not enough fields. Expected at least {expected}, found {found}"


def missing_fields(names: list[str]) -> str:
    """Return message for required fields that are empty after trimming."""
    return f"Required field{'s' if len(names) != 1 else ''} empty: {', '.join(names)}"


def invalid_operation_kind(kind: str) -> str:
    """Return message for an unknown operation kind."""
    return f"Invalid operation '{kind}'. Must be DEPOSIT or WITHDRAWAL"


def timestamp_length_mismatch(expected: int, value: str) -> str:
    """Return message for a timestamp of the wrong length."""
    return (
        f"Timestamp has wrong length. Expected {expected}, "
        f"found {len(value)}. Value: {value}"
    )


def source_not_readable(path: str, reason: str) -> str:
    """Return message for a transaction file that cannot be read."""
    return f"Cannot read transaction file '{path}': {reason}"
