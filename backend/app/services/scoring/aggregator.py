"""
Score Aggregator - Combines Lighthouse and SerpApi signals into one score.

Pure: receives already-fetched reports, performs no I/O and reads no
configuration. The weighting regime is chosen by the caller.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from app.services.scoring.models import (
    AggregatedResult,
    CoreWebVitals,
    Opportunity,
    PageQualityReport,
    VisibilityReport,
)
from app.services.scoring.weights import (
    WithVisibility,
    Regime,
    normalized_weights,
)
from app.logger import logger

# Lighthouse category id -> weight key
CATEGORIES = {
    "seo": "seo",
    "performance": "performance",
    "accessibility": "accessibility",
    "best-practices": "best_practices",
}

VITALS_AUDITS = {
    "LCP": "largest-contentful-paint",
    "TBT": "total-blocking-time",
    "CLS": "cumulative-layout-shift",
}

RANK_DECAY = 5              # points lost per position below #1
INDEX_SATURATION = 5        # indexed pages needed for a full index score
MAX_OPPORTUNITIES = 3


def _round_half_up(value: Decimal, places: str = "1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def category_score(raw: Optional[float]) -> int:
    """Lighthouse 0-1 score -> integer 0-100; missing counts as 0."""
    if raw is None:
        return 0
    return int(_round_half_up(Decimal(str(raw)) * 100))


def keyword_rank(organic_results: List[Dict[str, Any]], domain: str) -> int:
    """1-based position of the first result linking to domain, 0 if absent."""
    if not domain:
        return 0
    for position, result in enumerate(organic_results, start=1):
        link = (result or {}).get("link")
        if isinstance(link, str) and domain in link:
            return position
    return 0


def keyword_score(rank: int) -> int:
    if rank <= 0:
        return 0
    return max(0, 100 - (rank - 1) * RANK_DECAY)


def index_score(total_indexed: int) -> int:
    if total_indexed >= INDEX_SATURATION:
        return 100
    return max(0, round(total_indexed / INDEX_SATURATION * 100))


def core_web_vitals(audits: Mapping[str, Any]) -> CoreWebVitals:
    values = {}
    for metric, audit_id in VITALS_AUDITS.items():
        audit = audits.get(audit_id) or {}
        values[metric] = audit.get("displayValue") or None
    return CoreWebVitals(**values)


def top_opportunities(audits: Mapping[str, Any], limit: int = MAX_OPPORTUNITIES) -> List[Opportunity]:
    """First `limit` unresolved opportunity audits, in report order."""
    found = []
    for audit in audits.values():
        details = audit.get("details") or {}
        if details.get("type") != "opportunity" or _is_pass(audit.get("score")):
            continue
        found.append(Opportunity(title=audit.get("title"), displayValue=audit.get("displayValue")))
        if len(found) == limit:
            break
    return found


def passed_audits_count(audits: Mapping[str, Any]) -> int:
    return sum(1 for audit in audits.values() if _is_pass(audit.get("score")))


def _is_pass(score: Any) -> bool:
    # bool is an int subclass; True is not a Lighthouse score
    return not isinstance(score, bool) and score == 1


def final_score(scores: Dict[str, int], regime: Regime) -> str:
    """Weighted 0-100 total as a one-decimal 0-10 string, rounded half-up."""
    total = sum(
        (Decimal(scores[key]) * weight for key, weight in normalized_weights(regime).items()),
        Decimal(0),
    )
    return f"{_round_half_up(total / 10, '0.1'):.1f}"


class ScoreAggregator:
    """Builds an AggregatedResult from provider reports."""

    def aggregate(
        self,
        report: PageQualityReport,
        regime: Regime,
        visibility: Optional[VisibilityReport] = None,
        domain: Optional[str] = None,
    ) -> AggregatedResult:
        """
        Score one audit.

        Args:
            report: Lighthouse categories and audits
            regime: Weighting regime selected for the request
            visibility: SerpApi data; required when regime is WithVisibility
            domain: Target domain (no leading www.) used for rank lookup;
                required with a visibility report

        Returns:
            AggregatedResult with all scores and derived fields
        """
        scores = {
            key: category_score(report.category_raw(category_id))
            for category_id, key in CATEGORIES.items()
        }

        rank = None
        scores["keyword"] = 0
        scores["index"] = 0
        use_visibility = isinstance(regime, WithVisibility)
        if use_visibility:
            if visibility is None:
                raise ValueError("Visibility regime selected without a visibility report")
            if not domain:
                raise ValueError("Visibility regime selected without a target domain")
            rank = keyword_rank(visibility.organic_results, domain)
            scores["keyword"] = keyword_score(rank)
            scores["index"] = index_score(visibility.total_indexed)

        result = AggregatedResult(
            seo_score=scores["seo"],
            performance_score=scores["performance"],
            accessibility_score=scores["accessibility"],
            best_practices_score=scores["best_practices"],
            keyword_score=scores["keyword"],
            index_score=scores["index"],
            keyword_rank=rank,
            visibility_used=use_visibility,
            core_web_vitals=core_web_vitals(report.audits),
            top_opportunities=top_opportunities(report.audits),
            passed_audits_count=passed_audits_count(report.audits),
            final_score=final_score(scores, regime),
        )

        logger.debug(f"Aggregated ({regime.name}): {scores} -> {result.final_score}")
        return result
