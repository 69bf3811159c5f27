import html
import math
import shutil
import unicodedata
from datetime import datetime, timezone
from typing import Iterable, Optional

from rich.cells import cell_len
from rich.text import Text

from dtsearch.models import Hit, HighlightResult

EMPHASIS = "bold"


def term_width(default=80):
    try:
        return shutil.get_terminal_size((default, 24)).columns or default
    except (OSError, ValueError):
        return default


# ---- Cell values --------------------------------------------------------------

def decode_text(s: Optional[str]) -> str:
    """
    Turn entity-escaped text from the index (``&amp;`` etc.) into one line of
    plain text. Runs of whitespace, including newlines and tabs, become a
    single space and other control characters are dropped.
    """
    if not s:
        return ""
    text = "".join(ch for ch in html.unescape(s) if ch.isspace() or unicodedata.category(ch) != "Cc")
    return " ".join(text.split())


def install_command(cmd: str, hit: Hit, exact: bool = False) -> str:
    """
    Install line for a package and, if its types live on DefinitelyTyped, the
    matching @types package as a dev dependency:

        npm install -E foo && npm install -DE @types/foo
    """
    install = f"{cmd} {'-E ' if exact else ''}{hit.object_id}"
    if hit.ts == "included":
        return install
    if hit.ts == "definitely-typed" and hit.types.definitely_typed:
        return f"{install} && {cmd} -D{'E' if exact else ''} {hit.types.definitely_typed}"
    return ""


def _to_datetime(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def format_date(millis: Optional[int]) -> str:
    if millis is None:
        return ""
    return _to_datetime(millis).strftime("%Y-%m-%d")


def _round(x: float) -> int:
    return int(math.floor(x + 0.5))


def _relative_phrase(seconds: float) -> str:
    # each unit is rounded before it is compared, so 44.6 minutes is "an hour"
    days = seconds / 86400
    s = _round(seconds)
    minutes = _round(seconds / 60)
    hours = _round(seconds / 3600)
    whole_days = _round(days)
    months = _round(days * 4800 / 146097)
    years = _round(days * 400 / 146097)
    if s < 45:
        return "a few seconds"
    if minutes <= 1:
        return "a minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if hours <= 1:
        return "an hour"
    if hours < 22:
        return f"{hours} hours"
    if whole_days <= 1:
        return "a day"
    if whole_days < 26:
        return f"{whole_days} days"
    if months <= 1:
        return "a month"
    if months < 11:
        return f"{months} months"
    if years <= 1:
        return "a year"
    return f"{years} years"


def time_since(millis: Optional[int], now: Optional[datetime] = None) -> str:
    """'3 days ago' style rendering of an epoch-millis timestamp."""
    if millis is None:
        return ""
    now = now or datetime.now(timezone.utc)
    delta = (now - _to_datetime(millis)).total_seconds()
    phrase = _relative_phrase(abs(delta))
    return f"{phrase} ago" if delta >= 0 else f"in {phrase}"


# ---- Widths, alignment, emphasis ----------------------------------------------

def natural_width(header: str, values: Iterable[str], max_width: Optional[int] = None) -> int:
    """Widest of the header and every value, in terminal cells, capped at max_width."""
    width = max([cell_len(header)] + [cell_len(v) for v in values])
    if max_width is not None:
        width = min(width, max_width)
    return width


def align_cell(value: str, width: int, align: str = "left") -> str:
    """Crop to width, then pad to exactly width (left pad when right-aligned)."""
    text = Text(value)
    text.align("right" if align == "right" else "left", width)
    return text.plain


def highlight_value(value: str, annotation: Optional[HighlightResult]) -> Text:
    """
    Re-apply search-match emphasis to an already aligned cell.

    Emphasis is a style, not extra characters, so the cell keeps its width.
    Matched words are literal substrings (package names carry dots and plus
    signs) and match case-insensitively.
    """
    text = Text(value)
    if annotation is None or not annotation.is_match:
        return text
    if annotation.fully_highlighted:
        # padding stays plain
        start = len(value) - len(value.lstrip(" "))
        end = len(value.rstrip(" "))
        if end > start:
            text.stylize(EMPHASIS, start, end)
        return text
    words = [w for w in annotation.matched_words if w]
    if words:
        text.highlight_words(words, EMPHASIS, case_sensitive=False)
    return text
