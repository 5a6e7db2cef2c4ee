import re
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger


class Season(Enum):
    """Enumeration of academic seasons.

    The values are the two-letter prefixes used in canonical term names.
    """
    WINTER = "WS"
    SUMMER = "SS"

    @classmethod
    def from_token(cls, token: str) -> "Season":
        """Map a season token like "ws", "Winter" or "SS" to a Season.

        Raises:
            ValueError: If the token does not name a season.
        """
        season = _SEASON_TOKENS.get(token.strip().lower())
        if season is None:
            raise ValueError(f"Unknown season: {token}")
        return season


_SEASON_TOKENS = {
    "ws": Season.WINTER,
    "winter": Season.WINTER,
    "ss": Season.SUMMER,
    "summer": Season.SUMMER,
}

# Chronological correctness of ranges is checked after matching.
TERM_PATTERN = re.compile(
    r"(ws|winter|ss|summer)\s*([0-9]{2}|[0-9]{4})(?:\s*/\s*([0-9]{2}|[0-9]{4}))?",
    re.IGNORECASE,
)


class InvalidTermName(ValueError):
    """Raised when a term name cannot be parsed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid term name: {value!r}")


def _normalize_year4(year: str) -> str:
    """Expand a two-digit year to 20YY; four-digit years pass through."""
    if len(year) == 2:
        return f"20{year}"
    return year


def _normalize_year2(year: str) -> str:
    """Keep the last two digits of a year."""
    return year[-2:]


def _expected_next_year2(year4: str) -> str:
    """The suffix a range starting in `year4` must end with.

    Example: "2024" -> "25", "2099" -> "00".
    """
    return f"{(int(year4) + 1) % 100:02d}"


def to_canonical(text: str) -> str:
    """Convert a term name to its canonical form.

    Accepted inputs include (case-insensitive, surrounding whitespace ignored):

    * WS24, WS2024, Winter 2024, Winter2024
    * SS25/26, SS2025/26, Summer 2025/2026

    Args:
        text (str): The raw term name.

    Returns:
        str: The canonical form, e.g. "WS2024" or "WS2024/25", or the empty
        string if `text` is not a valid term name.
    """
    if not isinstance(text, str):
        logger.debug(f"Rejected non-string term name: {text!r}")
        return ""
    match = TERM_PATTERN.fullmatch(text.strip())
    if match is None:
        logger.debug(f"Rejected term name {text!r}: no match")
        return ""
    raw_season, raw_year1, raw_year2 = match.groups()
    prefix = _SEASON_TOKENS[raw_season.lower()].value
    year1 = _normalize_year4(raw_year1)
    if raw_year2 is None:
        return f"{prefix}{year1}"

    year2 = _normalize_year2(raw_year2)
    expected = _expected_next_year2(year1)
    if year2 != expected:
        logger.debug(
            f"Rejected term name {text!r}: range ends in {year2}, expected {expected}"
        )
        return ""
    return f"{prefix}{year1}/{year2}"


@dataclass(frozen=True)
class TermNameResult:
    """Outcome of `parse_term_name`.

    `value` holds the canonical form when `ok`; `text` is the input as given.
    """

    ok: bool
    value: str | None = None
    text: object = field(default=None, repr=False, compare=False)

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> str:
        """Return the canonical value or raise InvalidTermName."""
        if not self.ok or self.value is None:
            raise InvalidTermName(self.text)
        return self.value


def parse_term_name(text: str) -> TermNameResult:
    """Parse a term name without raising.

    >>> parse_term_name("Winter 2024/2025")
    TermNameResult(ok=True, value='WS2024/25')
    >>> parse_term_name("WS2025/24")
    TermNameResult(ok=False, value=None)
    """
    canonical = to_canonical(text)
    if not canonical:
        return TermNameResult(ok=False, text=text)
    return TermNameResult(ok=True, value=canonical, text=text)


class TermName(object):
    """An academic term name in canonical form.

    Canonical forms look like WS2024, SS2025, WS2024/25 or SS2025/26. Two term
    names are equal if and only if their canonical forms are.
    """

    __slots__ = ("_value",)

    _value: str

    def __init__(self, text: str):
        """Initialize a TermName from user input.

        Args:
            text (str): A term name like "WS24" or "Winter 2024/2025".

        Raises:
            InvalidTermName: If `text` is not a valid term name.
        """
        canonical = to_canonical(text)
        if not canonical:
            raise InvalidTermName(text)
        object.__setattr__(self, "_value", canonical)

    @classmethod
    def from_name(cls, name: str) -> "TermName":
        """Create a TermName from a term name string like "Winter 2024"."""
        return cls(name)

    @classmethod
    def from_parts(
        cls, season: Season | str, start_year: int, is_range: bool = False
    ) -> "TermName":
        """Create a TermName from a season and a four-digit starting year.

        Args:
            season (Season | str): A Season, or a season token like "Winter".
            start_year (int): The four-digit calendar year the term starts in.
            is_range (bool): Whether the term spans into the following year.

        Raises:
            InvalidTermName: If the season is unknown or the year is not four digits.
        """
        try:
            if not isinstance(season, Season):
                season = Season.from_token(season)
        except (ValueError, AttributeError):
            raise InvalidTermName(season)
        if isinstance(start_year, bool) or not isinstance(start_year, int):
            raise InvalidTermName(start_year)
        if not 1000 <= start_year <= 9999:
            raise InvalidTermName(start_year)
        text = f"{season.value}{start_year}"
        if is_range:
            text += "/" + _expected_next_year2(str(start_year))
        return cls(text)

    @staticmethod
    def is_valid(text: str) -> bool:
        """Whether `text` is an acceptable term name."""
        return bool(to_canonical(text))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    @property
    def canonical(self) -> str:
        return self._value

    @property
    def season(self) -> Season:
        return Season(self._value[:2])

    @property
    def start_year(self) -> int:
        return int(self._value[2:6])

    @property
    def end_year_suffix(self) -> str | None:
        """The two-digit suffix of a range term, or None for a single year."""
        _, sep, suffix = self._value.partition("/")
        return suffix if sep else None

    @property
    def is_range(self) -> bool:
        return self.end_year_suffix is not None

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TermName):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
