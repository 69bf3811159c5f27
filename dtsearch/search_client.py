# dtsearch/search_client.py
import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

from algoliasearch.exceptions import AlgoliaException, AlgoliaUnreachableHostException
from algoliasearch.search_client import SearchClient as AlgoliaSearchClient

from dtsearch.exceptions import SearchClientError
from dtsearch.models import Hit

logger = logging.getLogger(__name__)

ATTRIBUTES = [
    "types",
    "downloadsLast30Days",
    "humanDownloadsLast30Days",
    "popular",
    "keywords",
    "description",
    "modified",
    "homepage",
    "repository",
]

# Types either come from DefinitelyTyped or are bundled. The @types packages
# themselves are never interesting results.
IS_DT = 'types.ts:"definitely-typed"'
IS_INCLUDED = 'types.ts:"included"'
NOT_TYPES = "NOT owner.name:DefinitelyTyped"
FILTERS = {
    "default": f"({IS_DT} OR {IS_INCLUDED}) AND {NOT_TYPES}",
    "dt": IS_DT,
    "bundled": f"{IS_INCLUDED} AND {NOT_TYPES}",
    "untyped": NOT_TYPES,
}


def _status_of(e: Exception) -> Optional[int]:
    return getattr(e, "status_code", None)


def _looks_temporary(e: Exception) -> bool:
    if isinstance(e, AlgoliaUnreachableHostException):
        return True
    status = _status_of(e)
    return status is not None and (status >= 500 or status == 429)


class SearchClient:
    def __init__(self, app_id: str, api_key: str, index_name: str = "npm-search"):
        self.client = AlgoliaSearchClient.create(app_id, api_key)
        self.index = self.client.init_index(index_name)

    # --- Retry helper ------------------------------------------------------------
    def _retry(self, fn: Callable[[], Any], *, tries=4, base_sleep=0.3, max_sleep=4.0) -> Any:
        """
        Retries on transient search faults (unreachable hosts, 5xx, 429).
        - Exponential backoff + jitter
        - Fast-fails on anything else (bad key, bad filter)
        """
        last_err = None
        for i in range(tries):
            try:
                return fn()
            except AlgoliaException as e:
                last_err = e
                if not _looks_temporary(e) or i == tries - 1:
                    break
                sleep = min(base_sleep * (2 ** i), max_sleep) * random.uniform(0.7, 1.3)
                logger.debug("Search attempt %d failed (%s); retrying in %.2fs", i + 1, e, sleep)
                time.sleep(sleep)

        raise SearchClientError(str(last_err) or "Search failed", status=_status_of(last_err)) from last_err

    def search(self, query: str, *, num: int = 10, type_filter: str = "default") -> List[Hit]:
        """Ranked hits for ``query``, at most ``num`` of them."""
        params: Dict[str, Any] = {
            "analyticsTags": ["dtsearch"],
            "hitsPerPage": num,
            "filters": FILTERS[type_filter],
            "attributesToRetrieve": ATTRIBUTES,
        }
        start = time.monotonic()
        result = self._retry(lambda: self.index.search(query, params))
        logger.debug("Search responded in %d ms", (time.monotonic() - start) * 1000)
        logger.debug("Raw response: %s", result)

        hits = [Hit.model_validate(h) for h in result.get("hits") or []]
        logger.debug("Got %d results for %r (filter=%s)", len(hits), query, type_filter)
        return hits
