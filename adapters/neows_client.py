import logging
import os
from datetime import date, timedelta
from typing import Any, Dict, Optional

import requests

log = logging.getLogger(__name__)

BASE = "https://api.nasa.gov/neo/rest/v1"
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")


def has_nasa_key() -> bool:
    return bool(os.getenv("NASA_API_KEY"))


class NeoWsClient:
    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: float = 15.0):
        self.s = session or requests.Session()
        if not api_key and not has_nasa_key():
            log.info("NASA_API_KEY not set, using the rate-limited DEMO_KEY")
        self.api_key = api_key or NASA_API_KEY
        self.timeout = timeout

    def _get(self, path: str, **params) -> Dict[str, Any]:
        r = self.s.get(f"{BASE}/{path}", params={**params, "api_key": self.api_key}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def fetch_feed(self, start: Optional[date] = None, end: Optional[date] = None) -> Dict[str, Any]:
        """
        Close approaches between start and end (NeoWs caps the window at 7 days).
        Defaults to today .. today+7.
        """
        start = start or date.today()
        end = end or start + timedelta(days=7)
        return self._get("feed", start_date=start.isoformat(), end_date=end.isoformat())

    def fetch_neo(self, neo_id: str) -> Dict[str, Any]:
        return self._get(f"neo/{neo_id.strip()}")
