"""
Scoring Weights Configuration

Two mutually exclusive weighting regimes. Which one applies is decided once
per request, from configuration and request inputs only.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class WithVisibility:
    """Lighthouse SEO/performance blended with SerpApi keyword rank and index coverage."""
    name: str = "with_visibility"
    weights: Dict[str, Decimal] = field(default_factory=lambda: {
        "seo": Decimal("0.4"),
        "performance": Decimal("0.3"),
        "keyword": Decimal("0.2"),
        "index": Decimal("0.1"),
    })


@dataclass(frozen=True)
class WithoutVisibility:
    """All four Lighthouse categories."""
    name: str = "without_visibility"
    weights: Dict[str, Decimal] = field(default_factory=lambda: {
        "seo": Decimal("0.3"),
        "performance": Decimal("0.3"),
        "accessibility": Decimal("0.2"),
        "best_practices": Decimal("0.2"),
    })


Regime = Union[WithVisibility, WithoutVisibility]

WITH_VISIBILITY = WithVisibility()
WITHOUT_VISIBILITY = WithoutVisibility()


def normalized_weights(regime: Regime) -> Dict[str, Decimal]:
    """Scale a regime's weights so they sum to exactly 1."""
    total = sum(regime.weights.values(), Decimal(0))
    return {key: weight / total for key, weight in regime.weights.items()}


def select_regime(visibility_key: str, keyword: Optional[str], location: Optional[str]) -> Regime:
    """Pick the regime from configuration and request inputs alone."""
    if visibility_key and keyword and location:
        return WITH_VISIBILITY
    return WITHOUT_VISIBILITY


# --- Validation (Prevent Drift) ---
def _validate_weights():
    """Ensure every regime has non-negative weights with a positive total."""
    for regime in (WITH_VISIBILITY, WITHOUT_VISIBILITY):
        if any(w < 0 for w in regime.weights.values()):
            raise ValueError(f"CRITICAL: {regime.name} has a negative weight")
        total = sum(regime.weights.values(), Decimal(0))
        if total <= 0:
            raise ValueError(f"CRITICAL: {regime.name} weights sum to {total}, expected > 0")

_validate_weights()
