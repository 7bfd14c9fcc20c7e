"""
Pydantic schemas for audit responses.
"""

from typing import Optional
from pydantic import BaseModel, Field

from app.services.scoring.models import AggregatedResult


class CoreWebVitals(BaseModel):
    """Lighthouse display values for the Core Web Vitals."""
    LCP: Optional[str] = None
    TBT: Optional[str] = None
    CLS: Optional[str] = None


class Opportunity(BaseModel):
    """Unresolved Lighthouse opportunity."""
    title: Optional[str] = None
    displayValue: Optional[str] = None


class AuditResponse(BaseModel):
    """Complete audit response."""
    siteUrl: str

    # Lighthouse
    seoScore: int = Field(..., ge=0, le=100)
    performanceScore: int = Field(..., ge=0, le=100)
    accessibilityScore: int = Field(..., ge=0, le=100)
    bestPracticesScore: int = Field(..., ge=0, le=100)

    # SerpApi (0 when not used)
    keywordScore: int = Field(0, ge=0, le=100)
    indexScore: int = Field(0, ge=0, le=100)
    keywordRank: Optional[int] = None
    visibilityUsed: bool = False

    # Composite, 0.0 - 10.0
    finalScore: str = Field(..., pattern=r"^(10|\d)\.\d$")

    # Details
    coreWebVitals: CoreWebVitals = Field(default_factory=CoreWebVitals)
    topOpportunities: list[Opportunity] = []
    passedAuditsCount: int = Field(0, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "siteUrl": "https://www.example.com",
                "seoScore": 92,
                "performanceScore": 84,
                "accessibilityScore": 88,
                "bestPracticesScore": 95,
                "keywordScore": 0,
                "indexScore": 0,
                "keywordRank": None,
                "visibilityUsed": False,
                "finalScore": "8.9",
                "coreWebVitals": {"LCP": "2.1 s", "TBT": "150 ms", "CLS": "0.02"},
                "topOpportunities": [
                    {"title": "Reduce unused JavaScript", "displayValue": "Potential savings of 120 KiB"}
                ],
                "passedAuditsCount": 41
            }
        }

    @classmethod
    def from_result(cls, site_url: str, result: AggregatedResult) -> "AuditResponse":
        vitals = result.core_web_vitals
        return cls(
            siteUrl=site_url,
            seoScore=result.seo_score,
            performanceScore=result.performance_score,
            accessibilityScore=result.accessibility_score,
            bestPracticesScore=result.best_practices_score,
            keywordScore=result.keyword_score,
            indexScore=result.index_score,
            keywordRank=result.keyword_rank,
            visibilityUsed=result.visibility_used,
            finalScore=result.final_score,
            coreWebVitals=CoreWebVitals(LCP=vitals.LCP, TBT=vitals.TBT, CLS=vitals.CLS),
            topOpportunities=[
                Opportunity(title=o.title, displayValue=o.displayValue)
                for o in result.top_opportunities
            ],
            passedAuditsCount=result.passed_audits_count,
        )
