from __future__ import annotations
import logging
from typing import Dict, Any, Optional, List
import requests

from dopers.config import DATA_CONFIG
from dopers.errors import LoadError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("Name", "Nationality", "Year", "Time", "Doping")

sess = requests.Session()
sess.headers.update({"User-Agent": DATA_CONFIG["user_agent"]})


def _check_records(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise LoadError(f"expected a JSON array of race results, got {type(data).__name__}")
    for i, rec in enumerate(data):
        if not isinstance(rec, dict):
            raise LoadError(f"record {i} is not an object")
        missing = [k for k in REQUIRED_FIELDS if k not in rec]
        if missing:
            raise LoadError(f"record {i} is missing {', '.join(missing)}")
    return data


def fetch_results(url: Optional[str] = None, timeout: Optional[float] = None) -> List[Dict[str, Any]]:
    """
    Fetch the raw race results once. No retry, no cache.
    Any network, HTTP or payload problem is raised as LoadError.
    """
    url = url or DATA_CONFIG["url"]
    timeout = timeout if timeout is not None else DATA_CONFIG["timeout"]
    logger.info("Fetching race results from %s", url)
    try:
        r = sess.get(url, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        logger.error("Request to %s failed: %s", url, e)
        raise LoadError(f"could not fetch race results: {e}") from e
    except ValueError as e:
        # raised by r.json() on a body that is not JSON
        logger.error("Response from %s is not JSON: %s", url, e)
        raise LoadError("race results payload is not valid JSON") from e

    try:
        records = _check_records(data)
    except LoadError as e:
        logger.error("Malformed payload from %s: %s", url, e)
        raise
    logger.info("Fetched %d race results", len(records))
    return records
