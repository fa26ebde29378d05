"""Shared field normalizers for the yearly ATP match CSVs.

Every helper here is a pure per-field function: it takes the raw cell text
from a CSV row and returns a canonical value, or ``None`` when the cell is
absent. Categorical helpers never fail; they log and fall back to a fixed
default instead.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Column names of the yearly CSV schema. Extra columns (betting odds etc.) are ignored.
COL_LOCATION = "Location"
COL_TOURNAMENT = "Tournament"
COL_DATE = "Date"
COL_SERIES = "Series"
COL_COURT = "Court"
COL_SURFACE = "Surface"
COL_ROUND = "Round"
COL_BEST_OF = "Best of"
COL_WINNER = "Winner"
COL_LOSER = "Loser"
COL_WRANK = "WRank"
COL_LRANK = "LRank"
COL_WPTS = "WPts"
COL_LPTS = "LPts"
COL_WSETS = "Wsets"
COL_LSETS = "Lsets"
COL_COMMENT = "Comment"
MAX_SETS = 5

DEFAULT_ROUND = "1R"
DEFAULT_SERIES = "ATP250"
DEFAULT_SURFACE = "Hard"

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$")


def set_columns(index: int) -> tuple:
    """Winner/loser game columns for set ``index`` (1-based)."""
    return f"W{index}", f"L{index}"


def normalize_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if text == "" or text.upper() == "N/A":
        return None
    return text


def normalize_number(value: Any) -> Optional[Number]:
    text = normalize_value(value)
    # float() also takes digit separators ("1_000"); the CSVs never use them.
    if text is None or "_" in text:
        return None
    try:
        num = float(text)
    except ValueError:
        return None
    if not math.isfinite(num):
        return None
    if num.is_integer():
        return int(num)
    return num


def parse_date(value: Any) -> Optional[str]:
    """Return an ISO ``YYYY-MM-DD`` date or ``None``.

    Accepts ``YYYY-MM-DD`` and ``MM/DD/YYYY``. Two-digit years are read as 20xx.
    """
    text = normalize_value(value)
    if text is None:
        return None

    year = month = day = None
    m = _ISO_DATE_RE.match(text)
    if m:
        year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
    else:
        m = _US_DATE_RE.match(text)
        if m:
            month, day = int(m.group(1)), int(m.group(2))
            year_text = m.group(3)
            year = int(f"20{year_text}") if len(year_text) == 2 else int(year_text)

    if year is None:
        logger.warning("Could not parse date: %r", value)
        return None
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        logger.warning("Could not parse date: %r", value)
        return None


def normalize_round(value: Any) -> str:
    text = str(value or "").strip().lower()
    if "1st round" in text or text == "1r":
        return "1R"
    if "2nd round" in text or text == "2r":
        return "2R"
    if "3rd round" in text or text == "3r":
        return "3R"
    if "4th round" in text or text == "4r":
        return "4R"
    if "quarterfinal" in text or text == "qf":
        return "QF"
    if "semifinal" in text or text == "sf":
        return "SF"
    if "the final" in text or ("final" in text and "semifinal" not in text):
        return "F"
    if "round robin" in text or text == "rr":
        return "RR"
    if text == "q1" or "qualifying 1" in text:
        return "Q1"
    if text == "q2" or "qualifying 2" in text:
        return "Q2"
    if text == "q3" or "qualifying 3" in text:
        return "Q3"
    logger.warning("Unknown round type: %r. Defaulting to %s.", value, DEFAULT_ROUND)
    return DEFAULT_ROUND


def _warn_fallback(kind: str, value: Any, fallback: str) -> None:
    # Blank cells fall back quietly; only real unknown labels are worth a warning.
    if normalize_value(value) is not None:
        logger.warning("Unknown %s: %r. Defaulting to %s.", kind, value, fallback)


def normalize_series(value: Any) -> str:
    text = str(value or "").strip().upper()
    if "GRAND SLAM" in text:
        return "Grand Slam"
    if "MASTERS" in text:
        return "Masters"
    if "ATP500" in text:
        return "ATP500"
    if "ATP250" in text:
        return "ATP250"
    _warn_fallback("series", value, DEFAULT_SERIES)
    return DEFAULT_SERIES


def normalize_surface(value: Any) -> str:
    text = str(value or "").strip().upper()
    if "HARD" in text:
        return "Hard"
    if "CLAY" in text:
        return "Clay"
    if "GRASS" in text:
        return "Grass"
    if "CARPET" in text:
        return "Carpet"
    _warn_fallback("surface", value, DEFAULT_SURFACE)
    return DEFAULT_SURFACE


def normalize_court(value: Any) -> str:
    text = str(value or "").strip().upper()
    if "INDOOR" in text:
        return "Indoor"
    if "OUTDOOR" not in text:
        _warn_fallback("court", value, "Outdoor")
    return "Outdoor"


def slugify(text: str) -> str:
    """Lowercase, drop periods and punctuation, hyphenate whitespace.

    ``"Auger-Aliassime F."`` -> ``"auger-aliassime-f"``
    """
    base = (text or "").lower()
    base = base.replace(".", "")
    # Word characters are ASCII only; any Unicode whitespace becomes a hyphen.
    base = re.sub(r"[^A-Za-z0-9_\s-]", "", base)
    base = re.sub(r"\s+", "-", base)
    base = re.sub(r"-+", "-", base)
    return base.strip()
