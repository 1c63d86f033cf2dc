# =============================================================================
# POLYMARKET VERIFIER - SHARED ENUMS
# =============================================================================
#
# These enums define the shared vocabulary across the verifier.
# Values are the exact strings used in serialized results, so renaming
# a member's value is a breaking change for every consumer of the JSON.
#
# =============================================================================

from enum import Enum


class VerificationStatus(Enum):
    """
    Trust status of a single check or of the overall verdict.

    Ordered roughly by decreasing trust:
    VERIFIED > PARTIALLY_VERIFIED > UNVERIFIED.
    PENDING is never produced by the engine itself; it exists for
    consumers that render a verification which has not run yet.
    """
    VERIFIED = "verified"
    PARTIALLY_VERIFIED = "partially_verified"
    UNVERIFIED = "unverified"
    PENDING = "pending"


class CheckId(Enum):
    """
    Stable short codes, one per check kind.

    Declaration order is the order checks appear in every result.
    """
    MARKET_DATA = "market-data"
    PRICE_CONSISTENCY = "price-consistency"
    RESOLUTION_DATE = "resolution-date"
    LIQUIDITY = "liquidity"
    NEWS_SOURCES = "news-sources"
    CATEGORY = "category"


class NewsSentiment(Enum):
    """Sentiment classification attached to a news article."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
