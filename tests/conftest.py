"""
Shared fixtures for dtsearch tests.
Hits are built from index-shaped dicts, the same way the search client does.
"""
from datetime import datetime, timezone

import pytest

from dtsearch.models import Hit

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
# 2024-06-12T12:00:00Z, three days before NOW
MODIFIED = 1718193600000


def hit_data(name="left-pad", **overrides):
    data = {
        "objectID": name,
        "types": {"ts": "included"},
        "downloadsLast30Days": 123456,
        "humanDownloadsLast30Days": "123k",
        "popular": False,
        "keywords": ["pad"],
        "description": "String left pad",
        "modified": MODIFIED,
        "homepage": "https://example.com/" + name,
        "repository": {"url": "https://github.com/example/" + name},
        "_highlightResult": {
            "name": {"value": name, "matchLevel": "none", "fullyHighlighted": False, "matchedWords": []},
            "description": {"value": "", "matchLevel": "none", "matchedWords": []},
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_hit():
    def _make(name="left-pad", **overrides):
        return Hit.model_validate(hit_data(name, **overrides))
    return _make


@pytest.fixture
def now():
    return NOW
