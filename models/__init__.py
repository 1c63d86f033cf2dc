# =============================================================================
# POLYMARKET VERIFIER
# Module: models/__init__.py
# Purpose: Package initialization for data models
# =============================================================================

from .data_models import (
    Market,
    MarketOutcome,
    NewsArticle,
    VerificationCheck,
    VerificationResult,
)

__all__ = [
    "Market",
    "MarketOutcome",
    "NewsArticle",
    "VerificationCheck",
    "VerificationResult",
]
