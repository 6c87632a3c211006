"""Academic semester calendar: parsing, formatting, ordering and enumeration.

Calendar (inclusive bounds):
  spring  Feb 1  - May 31 of `year`
  summer  Jun 1  - Aug 31 of `year`
  fall    Sep 1 of `year` - Jan 31 of `year + 1`

January belongs to the previous year's fall term, so the fall year anchor is
the calendar year the term *starts* in.
"""

import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

Season = Literal["spring", "summer", "fall"]

SEASONS: tuple[Season, ...] = ("spring", "summer", "fall")
MIN_YEAR = 1900
MAX_YEAR = 2100

_SEASON_RANK: dict[str, int] = {"spring": 0, "summer": 1, "fall": 2}
_NEXT_SEASON: dict[str, tuple[Season, int]] = {
    "spring": ("summer", 0),
    "summer": ("fall", 0),
    "fall": ("spring", 1),
}
_YEAR_RE = re.compile(r"^[0-9]{4}$")


class SemesterError(ValueError):
    """Base class for malformed semester input."""

    kind = "InvalidSemester"


class InvalidFormatError(SemesterError):
    kind = "InvalidFormat"


class InvalidSeasonError(SemesterError):
    kind = "InvalidSeason"


class InvalidYearError(SemesterError):
    kind = "InvalidYear"


class Semester(BaseModel):
    """One academic term. Equal iff (year, season) are equal."""

    model_config = ConfigDict(frozen=True)

    year: int
    season: Season
    display: str
    start_date: date
    end_date: date

    def __str__(self) -> str:
        return self.display


def _season_dates(year: int, season: Season) -> tuple[date, date]:
    if season == "fall":
        return date(year, 9, 1), date(year + 1, 1, 31)
    if season == "spring":
        return date(year, 2, 1), date(year, 5, 31)
    return date(year, 6, 1), date(year, 8, 31)


def format_semester(year: int, season: Season) -> str:
    """Return the display form, e.g. ``format_semester(2024, "fall") == "Fall 2024"``."""
    return f"{season.capitalize()} {year}"


def make_semester(year: int, season: Season) -> Semester:
    """Build a Semester with its derived display string and date bounds."""
    if season not in _SEASON_RANK:
        msg = f"Invalid season: {season}. Must be fall, spring, or summer"
        raise InvalidSeasonError(msg)
    start, end = _season_dates(year, season)
    return Semester(
        year=year,
        season=season,
        display=format_semester(year, season),
        start_date=start,
        end_date=end,
    )


def get_current_semester(now: date | datetime | None = None) -> Semester:
    """Return the semester containing ``now`` (defaults to today)."""
    if now is None:
        now = datetime.now()
    month = now.month
    if month >= 9 or month == 1:
        year = now.year if month >= 9 else now.year - 1
        return make_semester(year, "fall")
    if 2 <= month <= 5:
        return make_semester(now.year, "spring")
    return make_semester(now.year, "summer")


def get_next_semester(
    current: Semester | None = None,
    now: date | datetime | None = None,
) -> Semester:
    """Return the term following ``current`` (or the current term)."""
    if current is None:
        current = get_current_semester(now)
    season, year_delta = _NEXT_SEASON[current.season]
    return make_semester(current.year + year_delta, season)


def parse_semester(text: str) -> Semester:
    """Parse strings like ``"Fall 2024"`` or ``"  spring   2025 "``.

    Raises:
        InvalidFormatError: input is not exactly two whitespace-separated tokens.
        InvalidSeasonError: season is not spring, summer or fall.
        InvalidYearError: year is not a 4-digit number in [1900, 2100].
    """
    parts = text.lower().split()
    if len(parts) != 2:
        msg = 'Invalid semester format. Expected "Season Year" (e.g., "Fall 2024")'
        raise InvalidFormatError(msg)

    season_str, year_str = parts
    if season_str not in _SEASON_RANK:
        msg = f"Invalid season: {season_str}. Must be fall, spring, or summer"
        raise InvalidSeasonError(msg)

    if not _YEAR_RE.match(year_str):
        msg = f"Invalid year: {year_str}"
        raise InvalidYearError(msg)
    year = int(year_str)
    if year < MIN_YEAR or year > MAX_YEAR:
        msg = f"Invalid year: {year_str}"
        raise InvalidYearError(msg)

    return make_semester(year, season_str)  # type: ignore[arg-type]


def compare_semesters(a: Semester, b: Semester) -> int:
    """Negative if ``a`` is earlier than ``b``, zero if equal, positive if later."""
    if a.year != b.year:
        return a.year - b.year
    return _SEASON_RANK[a.season] - _SEASON_RANK[b.season]


def semester_sort_key(s: Semester) -> tuple[int, int]:
    """Key for ``sorted()`` consistent with compare_semesters."""
    return s.year, _SEASON_RANK[s.season]


def get_semester_range(
    start_year: int,
    start_season: Season,
    end_year: int,
    end_season: Season,
    include_summer: bool = False,
) -> list[Semester]:
    """List every semester from start to end inclusive, oldest first."""
    end = make_semester(end_year, end_season)
    current = make_semester(start_year, start_season)
    semesters: list[Semester] = []
    while compare_semesters(current, end) <= 0:
        if include_summer or current.season != "summer":
            semesters.append(current)
        current = get_next_semester(current)
    return semesters


def is_semester_past(s: Semester, now: date | datetime | None = None) -> bool:
    return compare_semesters(s, get_current_semester(now)) < 0


def is_semester_current(s: Semester, now: date | datetime | None = None) -> bool:
    return compare_semesters(s, get_current_semester(now)) == 0


def is_semester_future(s: Semester, now: date | datetime | None = None) -> bool:
    return compare_semesters(s, get_current_semester(now)) > 0
