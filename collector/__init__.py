# =============================================================================
# POLYMARKET VERIFIER
# Module: collector/__init__.py
# Purpose: Turn raw Polymarket and news records into verifier inputs (NO fetching)
# =============================================================================

from .normalizer import MarketNormalizer, is_gamma_record
from .news_normalizer import NewsNormalizer, analyze_sentiment

__all__ = [
    "MarketNormalizer",
    "is_gamma_record",
    "NewsNormalizer",
    "analyze_sentiment",
]
