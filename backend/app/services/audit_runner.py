"""
Audit Runner - Main orchestrator for SEO score audits.

Coordinates validation, provider calls, and scoring.
"""
from typing import Optional, Tuple

import httpx

from app.config import Settings
from app.errors import AuditFailedError, ConfigurationError
from app.logger import logger
from app.services.collectors.perf_collector import PerfCollector
from app.services.collectors.serp_collector import SerpCollector
from app.services.scoring.aggregator import ScoreAggregator
from app.services.scoring.models import PageQualityReport, VisibilityReport
from app.services.scoring.weights import Regime, WithVisibility, select_regime
from app.services.site_url import parse_site_url
from app.schemas.audit_result import AuditResponse


class AuditRunner:
    """Orchestrates one audit request."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.client = client
        self.aggregator = ScoreAggregator()

    async def run(
        self,
        site_url: Optional[str],
        keyword: Optional[str] = None,
        location: Optional[str] = None,
    ) -> AuditResponse:
        """
        Run a complete audit on a URL.

        Args:
            site_url: The URL to audit
            keyword: Optional search term for the rank check
            location: Optional SerpApi location for the rank check

        Returns:
            AuditResponse with scores and derived metrics

        Raises:
            SiteUrlError: siteUrl missing or invalid (no calls made)
            ConfigurationError: PSI_API_KEY not configured (no calls made)
            AuditFailedError: any provider or scoring failure
        """
        logger.info(f"--- [START] New audit request for: {site_url} ---")

        # 1. Validate input
        domain = parse_site_url(site_url)

        # 2. Check configuration
        if not self.settings.PSI_API_KEY:
            logger.error("PSI_API_KEY is not configured")
            raise ConfigurationError("Missing PSI_API_KEY in environment.")

        # 3. Pick the weighting regime
        regime = select_regime(self.settings.SERPAPI_KEY, keyword, location)
        logger.info(f"Scoring regime: {regime.name}")

        try:
            # 4. Fetch provider data over one client per request
            if self.client is not None:
                report, visibility = await self._fetch(self.client, site_url, regime, keyword, location, domain)
            else:
                async with httpx.AsyncClient(timeout=self.settings.PAGESPEED_TIMEOUT) as client:
                    report, visibility = await self._fetch(client, site_url, regime, keyword, location, domain)

            # 5. Score
            result = self.aggregator.aggregate(report, regime, visibility=visibility, domain=domain)

        except Exception as e:
            logger.error(f"Audit failed: {e}")
            raise AuditFailedError(details=str(e), site_url=site_url) from e

        logger.info(
            f"Scores: seo={result.seo_score}, performance={result.performance_score}, "
            f"accessibility={result.accessibility_score}, best_practices={result.best_practices_score}, "
            f"keyword={result.keyword_score}, index={result.index_score}, final={result.final_score}"
        )
        logger.info(f"--- [END] Audit complete for: {site_url} ---")

        return AuditResponse.from_result(site_url, result)

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        site_url: str,
        regime: Regime,
        keyword: Optional[str],
        location: Optional[str],
        domain: str,
    ) -> Tuple[PageQualityReport, Optional[VisibilityReport]]:
        report = await PerfCollector(self.settings, client=client).fetch(site_url)

        visibility = None
        if isinstance(regime, WithVisibility):
            visibility = await SerpCollector(self.settings, client=client).fetch(keyword, location, domain)
        return report, visibility
