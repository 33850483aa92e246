"""
Assessment Layer

Deterministic, template-based commentary built from an indicator bundle.
Kept separate from the indicator engine; it only formats results.
"""

from twdash.services.assessment.narrative import (
    generate_assessment,
    market_bias,
    symbol_seed,
)

__all__ = [
    "generate_assessment",
    "market_bias",
    "symbol_seed",
]
