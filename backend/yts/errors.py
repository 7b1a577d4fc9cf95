"""Error taxonomy for the YTS client and its extraction engine."""
from __future__ import annotations

from typing import Any, Sequence


class YTSError(Exception):
    """Base class for every error raised by the YTS client."""


class PreconditionError(YTSError, ValueError):
    """Raised when a caller-supplied argument is rejected before any I/O."""


class StructuralError(YTSError):
    """Raised when a mandatory selector matches no elements on a page."""

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"no elements found for {selector!r}")


class FieldValidationError(YTSError):
    """A single field of a record that failed coercion or a validation rule."""

    def __init__(
        self,
        record: str,
        field: str,
        rule: str,
        value: Any,
        expected: str = "",
    ) -> None:
        self.record = record
        self.field = field
        self.rule = rule
        self.value = value
        self.expected = expected
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f'failed validation for "{self.record}.{self.field}" field\'s '
            f'"{self.rule}:{self.expected}" rule, provided value {self.value!r}'
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldValidationError):
            return NotImplemented
        return (
            self.record,
            self.field,
            self.rule,
            self.value,
            self.expected,
        ) == (other.record, other.field, other.rule, other.value, other.expected)

    def __hash__(self) -> int:
        return hash((self.record, self.field, self.rule, repr(self.value), self.expected))


class CompositeError(YTSError):
    """Several independent errors joined into one, rendered one per line."""

    def __init__(self, errors: Sequence[Exception]) -> None:
        if not errors:
            raise ValueError("a composite error needs at least one entry")
        self.errors: list[Exception] = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return "\n".join(str(error) for error in self.errors)


class RecordValidationError(CompositeError):
    """Every field validation failure of one record shape."""

    errors: list[FieldValidationError]

    def __init__(self, record: str, errors: Sequence[FieldValidationError]) -> None:
        self.record = record
        super().__init__(errors)

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in the order they were reported."""

        return [error.field for error in self.errors]


class FilterValidationError(RecordValidationError, PreconditionError):
    """Raised when API query filters fail validation before a request is made."""


class ItemScrapingError(YTSError):
    """Failure of one fragment within a listing, tagged with its position."""

    def __init__(self, section: str, index: int, cause: Exception) -> None:
        self.section = section
        self.index = index
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        lines = str(self.cause).splitlines() or [""]
        return "\n".join(f"{self.section}, i={self.index}, {line}" for line in lines)


class ListingError(CompositeError):
    """Every failing fragment of one listing section."""

    errors: list[ItemScrapingError]

    def __init__(self, section: str, errors: Sequence[ItemScrapingError]) -> None:
        self.section = section
        super().__init__(errors)

    @property
    def indexes(self) -> list[int]:
        """Positions of the failing fragments within the selection."""

        return [error.index for error in self.errors]


class UnexpectedStatusError(YTSError):
    """Raised when the remote catalog answers with a non-2xx status code."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"received response with status code: {status_code} for {url}")


class ContentRetrievalError(YTSError):
    """Raised when a response body cannot be decoded as JSON or HTML."""


class TorrentNotFoundError(YTSError):
    """Raised when no torrent matches the requested quality."""
