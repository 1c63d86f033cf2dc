# =============================================================================
# POLYMARKET VERIFIER
# Module: core/verification_checks.py
# Purpose: The six independent verification checks
# =============================================================================
#
# CONTRACT:
# Every check maps (market, news, now) -> VerificationCheck.
# - Pure: reads only its inputs, never mutates them
# - Independent: no check looks at another check's output
# - Deterministic: "now" is passed in, never read from the wall clock
#
# THRESHOLDS:
# The numeric tiers below ARE the verification contract. Downstream
# consumers and tests assert on the exact status/confidence pairs, so they
# are module constants, not configuration.
#
# FAULTS:
# A check may raise on malformed input (unparsable end date, non-numeric
# price, ...). Checks do NOT catch their own faults; the CheckRunner
# wraps every call in run_check() and turns a fault into a degraded
# CheckOutcome (unverified, confidence 0).
#
# =============================================================================

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models.data_models import Market, NewsArticle, VerificationCheck
from shared.enums import CheckId, VerificationStatus

logger = logging.getLogger(__name__)

VERIFIED = VerificationStatus.VERIFIED
PARTIAL = VerificationStatus.PARTIALLY_VERIFIED
UNVERIFIED = VerificationStatus.UNVERIFIED

FAILED_DETAILS = "Verification check failed"


# =============================================================================
# THRESHOLD CONFIGURATION
# =============================================================================

# Market data
MIN_QUESTION_LENGTH: int = 10          # question must be LONGER than this
MIN_OUTCOMES: int = 2
PRICE_SUM_TOLERANCE: float = 0.1

# Price consistency (|yes + no - 1|)
PRICE_DEVIATION_VERIFIED: float = 0.02
PRICE_DEVIATION_PARTIAL: float = 0.05

# Resolution date
MAX_RESOLUTION_DAYS: int = 365 * 5
SECONDS_PER_DAY: int = 60 * 60 * 24

# Liquidity (USD)
HIGH_VOLUME: float = 100_000
HIGH_LIQUIDITY: float = 10_000
MODERATE_VOLUME: float = 10_000
MODERATE_LIQUIDITY: float = 1_000

# News sources
MIN_SOURCES_VERIFIED: int = 3
MIN_SOURCES_PARTIAL: int = 2
SENTIMENT_CONSISTENCY_THRESHOLD: float = 0.6

# Category classification
CATEGORY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "politics": (
        "election", "president", "congress", "senate", "vote", "political",
        "trump", "biden", "republican", "democrat",
    ),
    "crypto": (
        "bitcoin", "btc", "ethereum", "eth", "crypto", "token", "blockchain", "defi",
    ),
    "sports": (
        "game", "match", "team", "player", "championship", "super bowl",
        "nfl", "nba", "mlb",
    ),
    "economy": (
        "gdp", "inflation", "fed", "interest rate", "economic", "recession", "market",
    ),
    "world": (
        "war", "country", "international", "global", "foreign", "treaty",
    ),
}


# =============================================================================
# CHECK METADATA
# =============================================================================

@dataclass(frozen=True)
class CheckSpec:
    """Static description of a check: everything except its verdict."""
    check_id: CheckId
    name: str
    description: str
    source: str

    def build(
        self,
        status: VerificationStatus,
        confidence: int,
        now: datetime,
        details: Optional[str] = None,
    ) -> VerificationCheck:
        return VerificationCheck(
            check_id=self.check_id.value,
            name=self.name,
            description=self.description,
            status=status,
            confidence=confidence,
            source=self.source,
            timestamp=to_epoch_ms(now),
            details=details,
        )


MARKET_DATA = CheckSpec(
    CheckId.MARKET_DATA,
    "Market Data Verification",
    "Verifies market exists on Polymarket with matching data",
    "Polymarket API",
)
PRICE_CONSISTENCY = CheckSpec(
    CheckId.PRICE_CONSISTENCY,
    "Price Consistency Check",
    "Verifies YES + NO prices sum to approximately 1.00",
    "Mathematical Verification",
)
RESOLUTION_DATE = CheckSpec(
    CheckId.RESOLUTION_DATE,
    "Resolution Date Verification",
    "Verifies market has a valid future resolution date",
    "Date Validation",
)
LIQUIDITY = CheckSpec(
    CheckId.LIQUIDITY,
    "Liquidity Verification",
    "Verifies market has sufficient trading activity",
    "Volume Analysis",
)
NEWS_SOURCES = CheckSpec(
    CheckId.NEWS_SOURCES,
    "News Source Verification",
    "Cross-references multiple news sources for consistency",
    "Multi-Source Analysis",
)
CATEGORY = CheckSpec(
    CheckId.CATEGORY,
    "Category Classification",
    "Verifies market is correctly categorized",
    "Content Analysis",
)


# =============================================================================
# HELPERS
# =============================================================================

def as_utc(moment: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    """Epoch milliseconds for an aware datetime (naive is taken as UTC)."""
    return int(as_utc(moment).timestamp() * 1000)


def parse_end_date(value) -> datetime:
    """
    Parse a market end date into an aware UTC datetime.

    Accepts datetime objects and ISO-8601 strings, including the
    trailing "Z" form the Polymarket API returns.

    Raises:
        ValueError: If the value is missing or not a valid ISO-8601 date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid end date: {value!r}")

    return as_utc(parsed)


def _pct(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


# =============================================================================
# CHECKS
# =============================================================================

def check_market_data(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """
    Verify basic market data is present and internally valid.

    verified/95 when id, question, outcome count, price range and price
    sum all hold; partially_verified/60 when only id and question hold;
    unverified/20 otherwise.
    """
    prices = [float(o.price) for o in market.outcomes]
    price_sum = sum(prices)

    has_valid_id = bool(market.market_id)
    has_valid_question = bool(market.question) and len(market.question) > MIN_QUESTION_LENGTH
    has_valid_outcomes = len(prices) >= MIN_OUTCOMES
    has_valid_prices = all(0.0 <= p <= 1.0 for p in prices)
    prices_near_one = abs(price_sum - 1.0) < PRICE_SUM_TOLERANCE

    signal = f"{len(prices)} outcomes, prices sum to {_pct(price_sum)}"

    if has_valid_id and has_valid_question and has_valid_outcomes and has_valid_prices and prices_near_one:
        return MARKET_DATA.build(
            VERIFIED, 95, now,
            f"Market data validated: {signal}",
        )
    if has_valid_id and has_valid_question:
        return MARKET_DATA.build(
            PARTIAL, 60, now,
            f"Basic market data verified, some fields may be incomplete ({signal})",
        )

    missing = []
    if not has_valid_id:
        missing.append("identifier")
    if not has_valid_question:
        missing.append("question")
    return MARKET_DATA.build(
        UNVERIFIED, 20, now,
        f"Unable to fully verify market data (invalid {' and '.join(missing)})",
    )


def check_price_consistency(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """
    Verify YES + NO prices sum to approximately 1.00.

    Only the first two outcomes are considered; a missing outcome counts
    as price 0.
    """
    outcomes = market.outcomes
    yes_price = float(outcomes[0].price) if len(outcomes) > 0 else 0.0
    no_price = float(outcomes[1].price) if len(outcomes) > 1 else 0.0
    price_sum = yes_price + no_price
    deviation = abs(price_sum - 1.0)

    if deviation < PRICE_DEVIATION_VERIFIED:
        return PRICE_CONSISTENCY.build(
            VERIFIED, 98, now,
            f"Prices sum to {_pct(price_sum)} (within 2% of 100%)",
        )
    if deviation < PRICE_DEVIATION_PARTIAL:
        return PRICE_CONSISTENCY.build(
            PARTIAL, 75, now,
            f"Prices sum to {_pct(price_sum)} (within 5% of 100%)",
        )
    return PRICE_CONSISTENCY.build(
        UNVERIFIED, 30, now,
        f"Price inconsistency detected: sum is {_pct(price_sum)}",
    )


def check_resolution_date(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """Verify the market has a valid future resolution date."""
    end_date = parse_end_date(market.end_date)
    days_until_end = (end_date - as_utc(now)).total_seconds() / SECONDS_PER_DAY
    day_count = math.ceil(days_until_end)

    if 0 < days_until_end < MAX_RESOLUTION_DAYS:
        return RESOLUTION_DATE.build(
            VERIFIED, 95, now,
            f"Resolution in {day_count} days ({end_date.date().isoformat()})",
        )
    if days_until_end > 0:
        return RESOLUTION_DATE.build(
            PARTIAL, 70, now,
            f"Long-term market: {day_count} days until resolution",
        )
    return RESOLUTION_DATE.build(
        UNVERIFIED, 20, now,
        f"Market may have already resolved ({abs(day_count)} days ago)",
    )


def check_liquidity(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """Verify the market has sufficient trading activity."""
    volume = float(market.volume or 0.0)
    liquidity = float(market.liquidity or 0.0)
    activity = f"${volume:,.0f} volume, ${liquidity:,.0f} liquidity"

    if volume > HIGH_VOLUME and liquidity > HIGH_LIQUIDITY:
        return LIQUIDITY.build(VERIFIED, 95, now, f"High activity: {activity}")
    if volume > MODERATE_VOLUME or liquidity > MODERATE_LIQUIDITY:
        return LIQUIDITY.build(PARTIAL, 70, now, f"Moderate activity: {activity}")
    return LIQUIDITY.build(
        UNVERIFIED, 40, now,
        f"Low activity market - exercise caution ({activity})",
    )


def sentiment_consistency(news: Sequence[NewsArticle]) -> float:
    """Fraction of articles sharing the first article's sentiment (0 if none)."""
    if not news:
        return 0.0
    first = news[0].sentiment
    return sum(1 for n in news if n.sentiment == first) / len(news)


def check_news_sources(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """Cross-reference news sources for independence and agreement."""
    source_count = len({n.source for n in news})
    consistency = sentiment_consistency(news)
    agreement = f"{consistency * 100:.0f}% sentiment agreement"

    if source_count >= MIN_SOURCES_VERIFIED and consistency > SENTIMENT_CONSISTENCY_THRESHOLD:
        return NEWS_SOURCES.build(
            VERIFIED, 85, now,
            f"{source_count} independent sources with consistent reporting ({agreement})",
        )
    if source_count >= MIN_SOURCES_PARTIAL:
        return NEWS_SOURCES.build(
            PARTIAL, 60, now,
            f"{source_count} sources found, sentiment varies ({agreement})",
        )
    if source_count == 1:
        return NEWS_SOURCES.build(
            PARTIAL, 40, now,
            "Single source - recommend additional research",
        )
    return NEWS_SOURCES.build(
        UNVERIFIED, 20, now,
        "No news sources available for verification",
    )


def count_category_matches(category: str, question: str) -> int:
    """Number of the category's keywords found in the question."""
    keywords = CATEGORY_KEYWORDS.get((category or "").lower(), ())
    question_lower = (question or "").lower()
    return sum(1 for kw in keywords if kw in question_lower)


def check_category_classification(
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> VerificationCheck:
    """
    Verify the market's category against keywords in its question.

    Zero matches is partially_verified/50, NOT unverified: a missing
    keyword does not mean the category is wrong.
    """
    match_count = count_category_matches(market.category, market.question)

    if match_count >= 2:
        return CATEGORY.build(
            VERIFIED, 90, now,
            f'Category "{market.category}" matches content ({match_count} keyword matches)',
        )
    if match_count == 1:
        return CATEGORY.build(
            PARTIAL, 65, now,
            f'Category "{market.category}" appears appropriate (1 keyword match)',
        )
    return CATEGORY.build(
        PARTIAL, 50, now,
        f'Category "{market.category}" could not be fully verified (0 keyword matches)',
    )


# =============================================================================
# REGISTRY & FAULT ISOLATION
# =============================================================================

CheckFunction = Callable[[Market, Sequence[NewsArticle], datetime], VerificationCheck]

# Fixed declaration order; results are always reported in this order.
CHECKS: Tuple[Tuple[CheckSpec, CheckFunction], ...] = (
    (MARKET_DATA, check_market_data),
    (PRICE_CONSISTENCY, check_price_consistency),
    (RESOLUTION_DATE, check_resolution_date),
    (LIQUIDITY, check_liquidity),
    (NEWS_SOURCES, check_news_sources),
    (CATEGORY, check_category_classification),
)


@dataclass(frozen=True)
class CheckOutcome:
    """
    Tagged result of running one check.

    Either a normal record (degraded=False) or a degraded record
    standing in for a check that faulted (degraded=True, error set).
    Both variants carry a valid VerificationCheck, so callers never
    need to handle an exception.
    """
    check: VerificationCheck
    degraded: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, check: VerificationCheck) -> "CheckOutcome":
        return cls(check=check)

    @classmethod
    def failed(cls, spec: CheckSpec, now: datetime, error: str) -> "CheckOutcome":
        return cls(
            check=spec.build(UNVERIFIED, 0, now, FAILED_DETAILS),
            degraded=True,
            error=error,
        )


def run_check(
    spec: CheckSpec,
    func: CheckFunction,
    market: Market,
    news: Sequence[NewsArticle],
    now: datetime,
) -> CheckOutcome:
    """Run one check, converting any fault into a degraded outcome."""
    try:
        return CheckOutcome.ok(func(market, news, now))
    except Exception as e:
        logger.warning(
            f"Check '{spec.check_id.value}' failed for market "
            f"{getattr(market, 'market_id', '?')!r}: {type(e).__name__}: {e}"
        )
        return CheckOutcome.failed(spec, now, f"{type(e).__name__}: {e}")


def check_ids() -> List[str]:
    """Short codes of all checks, in declaration order."""
    return [spec.check_id.value for spec, _ in CHECKS]
