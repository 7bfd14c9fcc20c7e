"""
Scoring data models - provider reports in, aggregated result out.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from app.errors import UpstreamError


@dataclass(frozen=True)
class PageQualityReport:
    """Lighthouse categories and audits, as returned by PageSpeed Insights."""
    categories: Mapping[str, Any] = field(default_factory=dict)
    audits: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "categories", MappingProxyType(dict(self.categories or {})))
        object.__setattr__(self, "audits", MappingProxyType(dict(self.audits or {})))

    @classmethod
    def from_psi(cls, payload: Dict[str, Any]) -> "PageQualityReport":
        """Build from a raw PSI v5 response body."""
        lighthouse = (payload or {}).get("lighthouseResult")
        if not lighthouse:
            raise UpstreamError("No Lighthouse result in PSI API response.")
        return cls(
            categories=lighthouse.get("categories") or {},
            audits=lighthouse.get("audits") or {},
        )

    def category_raw(self, name: str) -> Optional[float]:
        category = self.categories.get(name)
        if not isinstance(category, dict):
            return None
        return category.get("score")


@dataclass(frozen=True)
class VisibilityReport:
    """SerpApi organic results plus site: index coverage."""
    organic_results: List[Dict[str, Any]] = field(default_factory=list)
    total_indexed: int = 0

    @classmethod
    def from_serpapi(cls, search: Dict[str, Any], index: Dict[str, Any]) -> "VisibilityReport":
        """Build from the keyword search body and the site: search body."""
        info = (index or {}).get("search_information")
        if info is None:
            raise UpstreamError("No search_information in SerpApi index response.")
        return cls(
            organic_results=list((search or {}).get("organic_results") or []),
            total_indexed=int(info.get("total_results") or 0),
        )


@dataclass
class CoreWebVitals:
    LCP: Optional[str] = None
    TBT: Optional[str] = None
    CLS: Optional[str] = None


@dataclass
class Opportunity:
    title: Optional[str]
    displayValue: Optional[str]


@dataclass
class AggregatedResult:
    """Complete scoring result for one audit."""
    seo_score: int
    performance_score: int
    accessibility_score: int
    best_practices_score: int
    final_score: str

    keyword_score: int = 0
    index_score: int = 0
    keyword_rank: Optional[int] = None
    visibility_used: bool = False

    core_web_vitals: CoreWebVitals = field(default_factory=CoreWebVitals)
    top_opportunities: List[Opportunity] = field(default_factory=list)
    passed_audits_count: int = 0
