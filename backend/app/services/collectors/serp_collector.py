"""
SERP Collector - Keyword rank and index coverage from SerpApi.
"""
import httpx
from typing import Any, Dict, Optional

from app.config import Settings
from app.logger import logger
from app.services.scoring.models import VisibilityReport


class SerpCollector:
    """Runs the keyword search and the site: search against SerpApi."""

    SERPAPI_URL = "https://serpapi.com/search.json"

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.client = client

    async def fetch(self, keyword: str, location: str, domain: str) -> VisibilityReport:
        """Fetch organic results for keyword/location, then the indexed page count for domain."""
        if self.client is not None:
            return await self._fetch(self.client, keyword, location, domain)
        async with httpx.AsyncClient(timeout=self.settings.HTTP_TIMEOUT) as client:
            return await self._fetch(client, keyword, location, domain)

    async def _fetch(self, client: httpx.AsyncClient, keyword: str, location: str, domain: str) -> VisibilityReport:
        logger.info(f"Checking SERP rank for '{keyword}' in {location}")
        search = await self._search(client, {"q": keyword, "location": location})

        logger.info(f"Checking index coverage for site:{domain}")
        index = await self._search(client, {"q": f"site:{domain}"})

        report = VisibilityReport.from_serpapi(search, index)
        logger.info(
            f"SERP data: {len(report.organic_results)} organic results, "
            f"{report.total_indexed} indexed pages"
        )
        return report

    async def _search(self, client: httpx.AsyncClient, params: Dict[str, Any]) -> Dict[str, Any]:
        response = await client.get(
            self.SERPAPI_URL,
            params={**params, "api_key": self.settings.SERPAPI_KEY},
            timeout=self.settings.HTTP_TIMEOUT,
        )
        if response.status_code != 200:
            logger.warning(f"SerpApi error: {response.status_code}")
        response.raise_for_status()
        return response.json()
