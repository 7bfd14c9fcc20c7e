"""Pytest configuration and fixtures."""

import os

import pytest

# Keep a developer's .env out of the test run
os.environ["PSI_API_KEY"] = ""
os.environ["SERPAPI_KEY"] = ""


def make_psi_payload(
    seo: float | None = 0.92,
    performance: float | None = 0.84,
    accessibility: float | None = 0.88,
    best_practices: float | None = 0.95,
    audits: dict | None = None,
) -> dict:
    """Create a PageSpeed Insights v5 response body."""
    categories = {}
    for name, score in (
        ("seo", seo),
        ("performance", performance),
        ("accessibility", accessibility),
        ("best-practices", best_practices),
    ):
        if score is not None:
            categories[name] = {"id": name, "score": score}

    if audits is None:
        audits = {
            "largest-contentful-paint": {"score": 0.9, "title": "Largest Contentful Paint", "displayValue": "2.1 s"},
            "total-blocking-time": {"score": 1, "title": "Total Blocking Time", "displayValue": "40 ms"},
            "cumulative-layout-shift": {"score": 1, "title": "Cumulative Layout Shift", "displayValue": "0.02"},
            "unused-javascript": {
                "score": 0.4,
                "title": "Reduce unused JavaScript",
                "displayValue": "Potential savings of 120 KiB",
                "details": {"type": "opportunity"},
            },
            "document-title": {"score": 1, "title": "Document has a title element"},
        }

    return {"lighthouseResult": {"categories": categories, "audits": audits}}


def make_serp_payload(links: list[str]) -> dict:
    """Create a SerpApi keyword search body."""
    return {"organic_results": [{"position": i, "link": link} for i, link in enumerate(links, start=1)]}


def make_index_payload(total: int) -> dict:
    """Create a SerpApi site: search body."""
    return {"search_information": {"total_results": total}}


@pytest.fixture
def psi_payload() -> dict:
    return make_psi_payload()
