"""Parsing of single transaction file lines."""

from decimal import Decimal

from txledger.domain.entities import OperationKind, Transaction
from txledger.domain.errors import (
    AmountFormatError,
    BlankLineError,
    FieldCountError,
    InvalidOperationKindError,
    MissingFieldError,
    NonPositiveAmountError,
    TimestampFormatError,
    TimestampLengthError,
    field_count_mismatch,
    invalid_operation_kind,
    missing_fields,
    timestamp_length_mismatch,
)
from txledger.utils.amount_parser import parse_amount
from txledger.utils.date_parser import TIMESTAMP_LENGTH, parse_timestamp

DELIMITER = ","
FIELD_NAMES = ("branch", "account", "bank", "holder", "operation", "timestamp")
AMOUNT_FIELD = "amount"

# Files without an amount column count every operation as one unit
DEFAULT_AMOUNT = Decimal("1")


def expected_field_count(has_amount: bool) -> int:
    """Return the minimum number of columns for a schema."""
    return len(FIELD_NAMES) + (1 if has_amount else 0)


def parse_record(line: str, line_number: int, has_amount: bool) -> Transaction:
    """Parse one raw line into a Transaction.

    Checks run in a fixed order and stop at the first failure. Columns
    beyond the expected count are ignored.

    Args:
        line: Raw line without its line terminator
        line_number: 1-based line number, used in error reports
        has_amount: Whether the schema carries an amount column

    Returns:
        Transaction built from the trimmed fields

    Raises:
        ParseError: One of its subclasses, describing why the line is invalid
    """
    if line is None or not line.strip():
        raise BlankLineError(line_number, "Empty line")

    fields = line.split(DELIMITER)
    min_fields = expected_field_count(has_amount)
    if len(fields) < min_fields:
        raise FieldCountError(line_number, field_count_mismatch(min_fields, len(fields)))

    names = FIELD_NAMES + ((AMOUNT_FIELD,) if has_amount else ())
    values = {name: fields[i].strip() for i, name in enumerate(names)}

    empty = [name for name in names if not values[name]]
    if empty:
        raise MissingFieldError(line_number, missing_fields(empty))

    operation = values["operation"]
    if operation not in OperationKind.__members__:
        raise InvalidOperationKindError(line_number, invalid_operation_kind(operation))

    timestamp_str = values["timestamp"]
    if len(timestamp_str) != TIMESTAMP_LENGTH:
        raise TimestampLengthError(
            line_number, timestamp_length_mismatch(TIMESTAMP_LENGTH, timestamp_str)
        )
    try:
        timestamp = parse_timestamp(timestamp_str)
    except ValueError as e:
        raise TimestampFormatError(line_number, str(e))

    if has_amount:
        amount_str = values[AMOUNT_FIELD]
        try:
            amount = parse_amount(amount_str)
        except ValueError:
            raise AmountFormatError(line_number, f"Invalid amount: {amount_str}")
        if amount <= 0:
            raise NonPositiveAmountError(
                line_number, f"Amount must be positive: {amount_str}"
            )
    else:
        amount = DEFAULT_AMOUNT

    return Transaction(
        branch=values["branch"],
        account=values["account"],
        bank=values["bank"],
        holder=values["holder"],
        kind=OperationKind(operation),
        timestamp=timestamp,
        amount=amount,
    )
