"""
Candidate table columns.

Each Column knows how to pull one cell out of a Hit, how important it is and
which mutex group (if any) it competes in. Columns sharing a header and a
mutex group are alternative renderings of the same field; the wider, more
detailed variant gets the higher importance so it wins when there is room.

The catalog is built once per run and treated as immutable. Run options never
edit it in place: ``apply_overrides`` returns a new tuple.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from functools import partial
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from rich.text import Text

from dtsearch.config import RunOptions
from dtsearch.exceptions import UnknownColumnError
from dtsearch.formatting import decode_text, format_date, highlight_value, install_command, time_since
from dtsearch.models import Hit

# Shown by the fallback selection even when nothing fits.
ALWAYS_SHOW_IMPORTANCE = 25
FORCE_SHOW = 1000
NEVER_SHOW = -1


@dataclass(frozen=True)
class Column:
    header: str
    extract: Callable[[Hit], str]
    importance: int
    align: str = "left"
    max_width: Optional[int] = None
    mutex_group: Optional[str] = None
    highlight: Optional[Callable[[str, Hit], Text]] = None

    @property
    def label(self) -> str:
        """Header plus width cap, to tell mutex variants apart in debug output."""
        return self.header + (f"/{self.max_width}" if self.max_width else "")

    @property
    def title(self) -> str:
        return self.header.upper()


# ---- Extractors (total: an absent field gives "") ----------------------------

def _downloads(h: Hit) -> str:
    return h.human_downloads_last_30_days or ""


def _popular(h: Hit) -> str:
    return "\U0001f525" if h.popular else ""


def _name(h: Hit) -> str:
    return h.object_id


def _types_long(h: Hit) -> str:
    if h.ts == "included":
        return "<bundled>"
    if h.ts == "definitely-typed":
        return h.types.definitely_typed or ""
    return ""


def _types_short(h: Hit) -> str:
    if h.ts == "included":
        return "<inc>"
    if h.ts == "definitely-typed":
        return "dt"
    return ""


def _description(h: Hit) -> str:
    return decode_text(h.description)


def _homepage(h: Hit) -> str:
    return h.homepage or h.repository_url


def _repo(h: Hit) -> str:
    return h.repository_url


def _highlight_name(v: str, h: Hit) -> Text:
    return highlight_value(v, h.highlight_for("name"))


def _highlight_description(v: str, h: Hit) -> Text:
    return highlight_value(v, h.highlight_for("description"))


def build_catalog(exact: bool = False, now: Optional[datetime] = None) -> Tuple[Column, ...]:
    """The ordered candidate columns; selection keeps this order."""
    return (
        Column("DLs", _downloads, importance=3, align="right"),
        Column("pop", _popular, importance=2),
        Column("name", _name, importance=100, highlight=_highlight_name),
        Column("types", _types_long, importance=100, mutex_group="types"),
        Column("types", _types_short, importance=80, mutex_group="types"),
        Column("npm", partial(install_command, "npm install", exact=exact), importance=NEVER_SHOW),
        Column("yarn", partial(install_command, "yarn add", exact=exact), importance=NEVER_SHOW),
        Column("description", _description, importance=25, max_width=40, mutex_group="desc",
               highlight=_highlight_description),
        Column("description", _description, importance=30, max_width=60, mutex_group="desc",
               highlight=_highlight_description),
        Column("description", _description, importance=35, mutex_group="desc",
               highlight=_highlight_description),
        Column("date", lambda h: format_date(h.modified), importance=1),
        Column("updated", lambda h: time_since(h.modified, now), importance=5),
        Column("homepage", _homepage, importance=10),
        Column("repo", _repo, importance=NEVER_SHOW),
    )


def importance_overrides(options: RunOptions) -> List[Tuple[str, int]]:
    """Map run flags to (header, importance) overrides, applied in order."""
    overrides = []
    if options.yarn:
        overrides.append(("yarn", FORCE_SHOW))
    if options.npm:
        overrides.append(("npm", FORCE_SHOW))
    if options.install_requested:
        # install commands already name the @types package
        overrides.append(("types", ALWAYS_SHOW_IMPORTANCE))
    if options.repo:
        overrides.append(("repo", FORCE_SHOW))
        overrides.append(("homepage", NEVER_SHOW))
    return overrides


def apply_overrides(catalog: Sequence[Column], overrides: Iterable[Tuple[str, int]]) -> Tuple[Column, ...]:
    """
    Return a copy of ``catalog`` with the importance of every column matching
    each header replaced. Raises UnknownColumnError if a header matches
    nothing, since that means the overrides and the catalog disagree.
    """
    columns = list(catalog)
    for header, importance in overrides:
        matched = [i for i, col in enumerate(columns) if col.header == header]
        if not matched:
            raise UnknownColumnError(header)
        for i in matched:
            columns[i] = replace(columns[i], importance=importance)
    return tuple(columns)


def format_row(catalog: Sequence[Column], hit: Hit) -> List[str]:
    return [col.extract(hit) for col in catalog]
