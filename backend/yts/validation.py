"""Field coercion and validation rules for scraped and user-supplied values.

Raw values extracted from HTML are plain strings. The annotated types in this
module coerce them into typed values while reporting every violated rule using
a small, stable vocabulary (``required``, ``integer``, ``range``,
``membership``, ``rating``, ``url``). Pydantic performs the validation pass, so
all fields of a record are checked before anything is reported;
:func:`validate_record` translates pydantic's error list into
:class:`~backend.yts.errors.FieldValidationError` entries.
"""
from __future__ import annotations

import re
from typing import Annotated, Any, Callable, Iterable, Literal, Mapping, TypeVar, get_args

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    BeforeValidator,
    Field,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError

from .errors import FieldValidationError, RecordValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

Genre = Literal[
    "Action",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Family",
    "Fantasy",
    "Film-Noir",
    "Game-Show",
    "History",
    "Horror",
    "Music",
    "Musical",
    "Mystery",
    "News",
    "Reality-TV",
    "Romance",
    "Sci-Fi",
    "Sport",
    "Talk-Show",
    "Thriller",
    "War",
    "Western",
]
Quality = Literal["480p", "720p", "1080p", "1080p.x265", "2160p", "3D"]

GENRES: tuple[str, ...] = get_args(Genre)
QUALITIES: tuple[str, ...] = get_args(Quality)

# ASCII digits only.
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
RATING_PATTERN = re.compile(r"(?:10(?:\.0+)?|[0-9](?:\.[0-9]+)?) / 10(?:\.0+)?")
RATING_FORMAT = '"<number>[.<number>] / 10"'

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)

_RULES = {
    "missing": "required",
    "string_type": "required",
    "int_parsing": "integer",
    "int_type": "integer",
    "int_from_float": "integer",
    "greater_than": "range",
    "greater_than_equal": "range",
    "less_than": "range",
    "less_than_equal": "range",
    "literal_error": "membership",
    "bool_parsing": "boolean",
    "bool_type": "boolean",
}
_BOUNDS = (("gt", ">"), ("ge", ">="), ("lt", "<"), ("le", "<="))


def _rule_error(rule: str, message: str, expected: str) -> PydanticCustomError:
    return PydanticCustomError(rule, message, {"expected": expected})


def require_text(value: str) -> str:
    """Reject empty strings with a ``required`` failure."""

    if not value:
        raise _rule_error("required", "value is required", "non-empty value")
    return value


def leading_int(value: Any) -> Any:
    """Parse the first whitespace-delimited token of ``value`` as a base-10 integer."""

    if not isinstance(value, str):
        return value
    tokens = value.split()
    if not tokens:
        raise _rule_error("required", "value is required", "non-empty value")
    if not INTEGER_PATTERN.fullmatch(tokens[0]):
        raise _rule_error("integer", "value is not a base-10 integer", "base-10 integer")
    return int(tokens[0], 10)


def count_or_zero(value: Any) -> Any:
    """Like :func:`leading_int`, but an absent or blank value counts as zero."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return leading_int(value)


def absolute_url(value: str) -> str:
    """Ensure ``value`` parses as an absolute http(s) URL; the string is kept as-is."""

    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise _rule_error("url", "value is not an absolute URL", "absolute URL") from None
    return value


def rating_format(value: str) -> str:
    if not RATING_PATTERN.fullmatch(value):
        raise _rule_error("rating", "value is not a well-formed rating", RATING_FORMAT)
    return value


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value:
        return None
    return value


def optional_rating(value: str | None) -> str | None:
    return None if value is None else rating_format(value)


def member_of(members: Iterable[str]) -> Callable[[Any], Any]:
    """Build a validator accepting only the given members (case-sensitive)."""

    allowed = tuple(members)
    expected = " ".join(allowed)

    def _check(value: Any) -> Any:
        if value not in allowed:
            raise _rule_error("membership", "value is not an allowed member", expected)
        return value

    return _check


RequiredStr = Annotated[str, AfterValidator(require_text)]
Url = Annotated[str, AfterValidator(require_text), AfterValidator(absolute_url)]
LeadingInt = Annotated[int, BeforeValidator(leading_int)]
Year = Annotated[int, BeforeValidator(leading_int), Field(gt=0)]
Progress = Annotated[int, BeforeValidator(leading_int), Field(ge=0, le=100)]
LikeCount = Annotated[int, BeforeValidator(count_or_zero), Field(ge=0)]
Rating = Annotated[str, AfterValidator(require_text), AfterValidator(rating_format)]
OptionalRating = Annotated[
    str | None, BeforeValidator(blank_to_none), AfterValidator(optional_rating)
]
GenreField = Annotated[Genre, BeforeValidator(member_of(GENRES))]
QualityField = Annotated[Quality, BeforeValidator(member_of(QUALITIES))]


def _field_name(loc: tuple[int | str, ...]) -> str:
    name = ""
    for part in loc:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name = f"{name}.{part}" if name else str(part)
    return name


def _expected(error: Mapping[str, Any]) -> str:
    ctx = error.get("ctx") or {}
    if "expected" in ctx:
        return str(ctx["expected"])
    for key, symbol in _BOUNDS:
        if key in ctx:
            return f"{symbol} {ctx[key]}"
    return ""


def _raw_value(data: Any, loc: tuple[int | str, ...]) -> Any:
    """Look up the unvalidated value at ``loc``; ``None`` when nothing is there."""

    value = data
    for part in loc:
        if isinstance(part, int) and isinstance(value, (list, tuple)) and 0 <= part < len(value):
            value = value[part]
        elif isinstance(part, str) and isinstance(value, Mapping) and part in value:
            value = value[part]
        else:
            return None
    return value


def translate_errors(
    record: str, exc: ValidationError, data: Mapping[str, Any]
) -> list[FieldValidationError]:
    """Convert a pydantic ``ValidationError`` into one entry per offending field.

    The reported value is always the raw input found in ``data`` at the
    error's location, before any coercion.
    """

    translated = []
    for error in exc.errors():
        kind = error["type"]
        translated.append(
            FieldValidationError(
                record=record,
                field=_field_name(error["loc"]),
                rule=_RULES.get(kind, kind),
                value=_raw_value(data, error["loc"]),
                expected=_expected(error),
            )
        )
    return translated


def validate_record(
    model: type[ModelT], data: Mapping[str, Any], *, record: str | None = None
) -> ModelT:
    """Validate ``data`` into ``model`` or raise a :class:`RecordValidationError`.

    Every failing field is reported; validation never stops at the first
    problem.
    """

    name = record or model.__name__
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RecordValidationError(name, translate_errors(name, exc, data)) from exc
