"""Tests for the score aggregator."""

import pytest

from app.services.scoring.aggregator import (
    ScoreAggregator,
    category_score,
    core_web_vitals,
    final_score,
    index_score,
    keyword_rank,
    keyword_score,
    passed_audits_count,
    top_opportunities,
)
from app.services.scoring.models import PageQualityReport, VisibilityReport
from app.services.scoring.weights import WITH_VISIBILITY, WITHOUT_VISIBILITY

from conftest import make_psi_payload


def opportunity(title: str, score, display: str = "Potential savings of 1 s") -> dict:
    return {"title": title, "score": score, "displayValue": display, "details": {"type": "opportunity"}}


class TestCategoryScore:
    """Tests for Lighthouse category extraction."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(0.92, 92), (0.0, 0), (1.0, 100), (0.925, 93), (0.005, 1), (None, 0)],
    )
    def test_rounds_to_integer_percent(self, raw, expected) -> None:
        assert category_score(raw) == expected

    def test_missing_category_contributes_zero(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload(accessibility=None))

        assert report.category_raw("accessibility") is None
        result = ScoreAggregator().aggregate(report, WITHOUT_VISIBILITY)
        assert result.accessibility_score == 0

    def test_null_category_score_contributes_zero(self) -> None:
        payload = make_psi_payload()
        payload["lighthouseResult"]["categories"]["seo"]["score"] = None

        result = ScoreAggregator().aggregate(PageQualityReport.from_psi(payload), WITHOUT_VISIBILITY)
        assert result.seo_score == 0


class TestVisibilityScores:
    """Tests for keyword rank and index coverage."""

    @pytest.mark.parametrize("rank,expected", [(1, 100), (2, 95), (5, 80), (20, 5), (21, 0), (50, 0), (0, 0)])
    def test_keyword_score_decay(self, rank, expected) -> None:
        assert keyword_score(rank) == expected

    @pytest.mark.parametrize("total,expected", [(0, 0), (1, 20), (2, 40), (3, 60), (5, 100), (50, 100)])
    def test_index_score_ramp(self, total, expected) -> None:
        assert index_score(total) == expected

    def test_rank_is_first_matching_position(self) -> None:
        results = [
            {"link": "https://other.com/"},
            {"link": "https://example.com/page"},
            {"link": "https://example.com/"},
        ]
        assert keyword_rank(results, "example.com") == 2

    def test_rank_not_found(self) -> None:
        assert keyword_rank([{"link": "https://other.com/"}], "example.com") == 0
        assert keyword_rank([], "example.com") == 0

    def test_results_without_link_keep_their_position(self) -> None:
        results = [{"title": "Ad block"}, {"link": None}, {"link": "https://www.example.com/"}]
        assert keyword_rank(results, "example.com") == 3


class TestDerivedFields:
    """Tests for Core Web Vitals, opportunities and passed audits."""

    def test_core_web_vitals(self) -> None:
        audits = {
            "largest-contentful-paint": {"displayValue": "2.5 s"},
            "cumulative-layout-shift": {"displayValue": "0.1"},
        }
        vitals = core_web_vitals(audits)

        assert vitals.LCP == "2.5 s"
        assert vitals.TBT is None
        assert vitals.CLS == "0.1"

    def test_top_opportunities_limit_and_order(self) -> None:
        audits = {
            "a": opportunity("A", 0.5),
            "b": opportunity("B", 1),
            "c": {"title": "C", "score": 0, "details": {"type": "table"}},
            "d": opportunity("D", None),
            "e": {"title": "E", "score": 0},
            "f": opportunity("F", 0),
            "g": opportunity("G", 0.2),
        }
        found = top_opportunities(audits)

        assert [o.title for o in found] == ["A", "D", "F"]
        assert found[0].displayValue == "Potential savings of 1 s"

    def test_top_opportunities_excludes_passed(self) -> None:
        audits = {"a": opportunity("A", 1), "b": opportunity("B", 1)}
        assert top_opportunities(audits) == []

    def test_passed_audits_count_is_strict(self) -> None:
        audits = {
            "a": {"score": 1},
            "b": {"score": 1.0},
            "c": {"score": 0.99},
            "d": {"score": None},
            "e": {"score": 0},
            "f": {"score": True},
            "g": {},
        }
        assert passed_audits_count(audits) == 2


class TestFinalScore:
    """Tests for the composite score."""

    def test_visibility_regime_example(self) -> None:
        scores = {"seo": 92, "performance": 84, "keyword": 100, "index": 100}
        # 92*0.4 + 84*0.3 + 100*0.2 + 100*0.1 = 91.8
        assert final_score(scores, WITH_VISIBILITY) == "9.2"

    def test_lighthouse_regime_example(self) -> None:
        scores = {"seo": 92, "performance": 84, "accessibility": 88, "best_practices": 95}
        # 27.6 + 25.2 + 17.6 + 19.0 = 89.4
        assert final_score(scores, WITHOUT_VISIBILITY) == "8.9"

    def test_rounds_half_up(self) -> None:
        scores = {"seo": 15, "performance": 0, "accessibility": 0, "best_practices": 0}
        # 4.5 / 10 = 0.45
        assert final_score(scores, WITHOUT_VISIBILITY) == "0.5"

    def test_bounds(self) -> None:
        top = {"seo": 100, "performance": 100, "accessibility": 100, "best_practices": 100}
        bottom = {"seo": 0, "performance": 0, "accessibility": 0, "best_practices": 0}

        assert final_score(top, WITHOUT_VISIBILITY) == "10.0"
        assert final_score(bottom, WITHOUT_VISIBILITY) == "0.0"

    @pytest.mark.parametrize("seo,perf,acc,bp", [(0, 100, 33, 67), (1, 2, 3, 4), (99, 98, 97, 96), (50, 51, 52, 53)])
    def test_always_one_decimal_in_range(self, seo, perf, acc, bp) -> None:
        value = final_score(
            {"seo": seo, "performance": perf, "accessibility": acc, "best_practices": bp},
            WITHOUT_VISIBILITY,
        )
        whole, _, fraction = value.partition(".")
        assert len(fraction) == 1
        assert 0.0 <= float(value) <= 10.0


class TestScoreAggregator:
    """Tests for the full aggregation."""

    def test_without_visibility(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload())
        result = ScoreAggregator().aggregate(report, WITHOUT_VISIBILITY)

        assert result.seo_score == 92
        assert result.performance_score == 84
        assert result.accessibility_score == 88
        assert result.best_practices_score == 95
        assert result.keyword_score == 0
        assert result.index_score == 0
        assert result.keyword_rank is None
        assert result.visibility_used is False
        assert result.final_score == "8.9"
        assert result.core_web_vitals.LCP == "2.1 s"
        assert [o.title for o in result.top_opportunities] == ["Reduce unused JavaScript"]
        assert result.passed_audits_count == 3

    def test_with_visibility(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload())
        visibility = VisibilityReport(
            organic_results=[{"link": "https://example.com/"}],
            total_indexed=120,
        )
        result = ScoreAggregator().aggregate(report, WITH_VISIBILITY, visibility=visibility, domain="example.com")

        assert result.keyword_rank == 1
        assert result.keyword_score == 100
        assert result.index_score == 100
        assert result.visibility_used is True
        assert result.final_score == "9.2"

    def test_visibility_regime_ignores_accessibility(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload(accessibility=0.0, best_practices=0.0))
        visibility = VisibilityReport(organic_results=[], total_indexed=0)
        result = ScoreAggregator().aggregate(report, WITH_VISIBILITY, visibility=visibility, domain="example.com")

        # 92*0.4 + 84*0.3 = 62.0
        assert result.final_score == "6.2"
        assert result.keyword_rank == 0

    def test_visibility_regime_requires_domain(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload())
        visibility = VisibilityReport(organic_results=[{"link": "https://unrelated.org/"}], total_indexed=0)

        with pytest.raises(ValueError, match="target domain"):
            ScoreAggregator().aggregate(report, WITH_VISIBILITY, visibility=visibility)

    def test_empty_domain_never_matches(self) -> None:
        assert keyword_rank([{"link": "https://unrelated.org/"}], "") == 0

    def test_visibility_regime_requires_report(self) -> None:
        report = PageQualityReport.from_psi(make_psi_payload())

        with pytest.raises(ValueError):
            ScoreAggregator().aggregate(report, WITH_VISIBILITY)
