"""
Performance Collector - Fetch PageSpeed Insights (Lighthouse) data.
"""
import httpx
from typing import Optional

from app.config import Settings
from app.logger import logger
from app.services.scoring.models import PageQualityReport


class PerfCollector:
    """Fetches the Lighthouse report for a URL from PageSpeed Insights."""

    PAGESPEED_API = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
    CATEGORIES = ["performance", "seo", "accessibility", "best-practices"]

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.client = client

    async def fetch(self, url: str) -> PageQualityReport:
        """Fetch and parse the PageSpeed report.

        Errors are not swallowed: HTTP failures raise httpx errors and a body
        without a Lighthouse result raises UpstreamError.
        """
        params = {
            "url": url,
            "strategy": self.settings.PSI_STRATEGY,
            "key": self.settings.PSI_API_KEY,
            "category": self.CATEGORIES,
        }

        logger.info(f"Requesting PageSpeed report for {url} ({self.settings.PSI_STRATEGY})")

        if self.client is not None:
            response = await self._get(self.client, params)
        else:
            async with httpx.AsyncClient(timeout=self.settings.PAGESPEED_TIMEOUT) as client:
                response = await self._get(client, params)

        if response.status_code != 200:
            logger.warning(f"PageSpeed API error: {response.status_code}")
        response.raise_for_status()

        report = PageQualityReport.from_psi(response.json())
        logger.info(f"PageSpeed categories: {sorted(report.categories)}")
        return report

    async def _get(self, client: httpx.AsyncClient, params: dict) -> httpx.Response:
        return await client.get(
            self.PAGESPEED_API,
            params=params,
            headers={"Accept": "application/json"},
            timeout=self.settings.PAGESPEED_TIMEOUT,
        )
