"""Transaction file import service."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from txledger.domain.entities import LoadResult, OperationKind, ParseFailure
from txledger.domain.errors import ParseError, SourceReadError, source_not_readable
from txledger.domain.record_parser import (
    AMOUNT_FIELD,
    DELIMITER,
    expected_field_count,
    parse_record,
)
from txledger.utils.date_parser import parse_timestamp

logger = logging.getLogger(__name__)

_KIND_COLUMN = 4
_TIMESTAMP_COLUMN = 5


def _is_timestamp(value: str) -> bool:
    try:
        parse_timestamp(value.strip())
    except ValueError:
        return False
    return True


def is_header(line: str) -> bool:
    """Return True if a first line looks like a column header.

    A header has neither an operation kind in its fifth column nor a
    timestamp in its sixth. A line with only one of them is a malformed
    data line and is left for the parser to report.
    """
    fields = line.split(DELIMITER)
    if not line.strip() or len(fields) <= _TIMESTAMP_COLUMN:
        return False
    return (
        fields[_KIND_COLUMN].strip() not in OperationKind.__members__
        and not _is_timestamp(fields[_TIMESTAMP_COLUMN])
    )


def detect_amount_column(lines: Sequence[str], header: bool) -> bool:
    """Guess whether the file schema has an amount column.

    With a header only the header is consulted. Without one, any data line
    with an amount field switches the schema on, so that short lines are
    reported instead of silently defaulting every amount.
    """
    if not lines:
        return False
    wanted = expected_field_count(True)
    if header:
        return (
            len(lines[0].split(DELIMITER)) >= wanted
            or AMOUNT_FIELD.upper() in lines[0].upper()
        )
    return any(
        len(line.split(DELIMITER)) >= wanted for line in lines if line.strip()
    )


class TransactionFileService:
    """Service for reading transaction files into validated transactions."""

    def load(self, file_path: str, has_amount: Optional[bool] = None) -> LoadResult:
        """Read and parse a transaction file.

        Args:
            file_path: Path to the comma-separated transaction file
            has_amount: Force the amount column on or off; detected from the
                first line when None

        Returns:
            LoadResult with parsed transactions (in file order, duplicates
            included) and the lines that failed validation

        Raises:
            SourceReadError: If the file cannot be opened or decoded
        """
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                lines = [line.rstrip("\n") for line in f]
        except FileNotFoundError:
            raise SourceReadError(source_not_readable(file_path, "file not found"))
        except IsADirectoryError:
            raise SourceReadError(source_not_readable(file_path, "is a directory"))
        except PermissionError:
            raise SourceReadError(source_not_readable(file_path, "permission denied"))
        except UnicodeDecodeError as e:
            raise SourceReadError(source_not_readable(file_path, f"not valid UTF-8 ({e.reason})"))
        except OSError as e:
            raise SourceReadError(source_not_readable(file_path, e.strerror or str(e)))

        logger.info("Read %d line(s) from %s", len(lines), file_path)
        return self.load_lines(lines, has_amount=has_amount, source=str(path))

    def load_lines(
        self,
        lines: Iterable[str],
        has_amount: Optional[bool] = None,
        source: str = "<memory>",
    ) -> LoadResult:
        """Parse already-read lines.

        Line numbers are 1-based over all given lines, header included.
        """
        lines = list(lines)
        if not lines:
            return LoadResult(
                source=source,
                transactions=(),
                errors=(),
                lines_processed=0,
                has_header=False,
                has_amount=bool(has_amount),
            )

        header = is_header(lines[0])
        if has_amount is None:
            has_amount = detect_amount_column(lines, header)
        logger.debug(
            "%s: header=%s, amount column=%s", source, header, has_amount
        )

        transactions = []
        errors = []
        start = 1 if header else 0
        for line_number, line in enumerate(lines[start:], start=start + 1):
            try:
                transactions.append(parse_record(line, line_number, has_amount))
            except ParseError as e:
                logger.info("%s: %s", source, e)
                errors.append(ParseFailure(e.line_number, e.code, e.message))

        processed = len(lines) - start
        logger.info(
            "%s: %d line(s) processed, %d valid, %d with errors",
            source,
            processed,
            len(transactions),
            len(errors),
        )
        return LoadResult(
            source=source,
            transactions=tuple(transactions),
            errors=tuple(errors),
            lines_processed=processed,
            has_header=header,
            has_amount=has_amount,
        )
