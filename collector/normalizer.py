# =============================================================================
# POLYMARKET VERIFIER
# Module: collector/normalizer.py
# Purpose: Normalize raw Polymarket Gamma API records into Market objects
# =============================================================================
#
# GAMMA QUIRKS:
# - "outcomes" and "outcomePrices" are JSON-encoded strings:
#     "outcomes": "[\"Yes\", \"No\"]", "outcomePrices": "[\"0.65\", \"0.35\"]"
# - volume / liquidity may be numeric strings
# - category is often missing; the first event tag overrides it, and
#   "other" is refined from question (or event title) keywords
#
# DESIGN:
# - Deterministic: same input => same output
# - No validation: inconsistent data passes through untouched so the
#   verification checks can score it. Only unparsable outcome JSON is
#   replaced, by a neutral 50/50 Yes/No pair.
#
# =============================================================================

import json
import logging
from typing import Dict, Any, List, Optional, Tuple

from models.data_models import Market, MarketOutcome

logger = logging.getLogger(__name__)


DEFAULT_OUTCOME_NAMES = ["Yes", "No"]
DEFAULT_PRICE = 0.5

# Checked in order; first category with a hit wins.
CATEGORY_INFERENCE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("crypto", ("bitcoin", "crypto", "eth", "btc")),
    ("politics", (
        "trump", "election", "president", "congress", "senate",
        "governor", "macron", "starmer",
    )),
    ("sports", ("nba", "nfl", "mlb", "soccer", "super bowl", "championship")),
    ("economy", (
        "gdp", "inflation", "fed", "interest rate", "recession",
        "doge", "budget", "spending",
    )),
    ("world", ("war", "ukraine", "russia", "nato", "china", "military")),
)

# Parent event title is only consulted for crypto.
TITLE_INFERENCE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "crypto": ("bitcoin", "crypto"),
}


def is_gamma_record(data: Dict[str, Any]) -> bool:
    """True if the dict looks like a raw Gamma market rather than the flat shape."""
    return "outcomePrices" in data or isinstance(data.get("outcomes"), str)


class MarketNormalizer:
    """
    Normalizes raw Gamma API market dicts into Market records.
    """

    def normalize(
        self,
        market: Dict[str, Any],
        event_tags: Optional[List[Any]] = None,
        event_title: Optional[str] = None,
    ) -> Market:
        """
        Normalize a single raw market.

        Args:
            market: Raw Gamma market dictionary
            event_tags: Tags of the parent event, if known
            event_title: Title of the parent event, if known

        Returns:
            Market record
        """
        market_id = self._extract_market_id(market)
        question = str(market.get("question") or market.get("title") or "")
        tags = self._extract_tags(market.get("tags") or event_tags or [])

        return Market(
            market_id=market_id,
            question=question,
            category=self._extract_category(market, question, tags, event_title),
            outcomes=self._extract_outcomes(market, market_id),
            volume=self._parse_number(market.get("volume")),
            liquidity=self._parse_number(market.get("liquidity")),
            end_date=market.get("endDate") or market.get("endDateIso"),
            slug=(str(market.get("slug") or "").strip().strip("/") or None),
            description=market.get("description"),
            tags=tuple(tags),
        )

    def normalize_many(self, markets: List[Dict[str, Any]]) -> List[Market]:
        """Normalize multiple raw markets."""
        return [self.normalize(m) for m in markets]

    def _extract_market_id(self, market: Dict[str, Any]) -> str:
        """Extract market ID from various possible field names."""
        for field_name in ["id", "market_id", "conditionId"]:
            value = market.get(field_name)
            if value:
                return str(value)
        return ""

    def _extract_outcomes(
        self,
        market: Dict[str, Any],
        market_id: str,
    ) -> Tuple[MarketOutcome, ...]:
        """
        Decode the JSON-string outcome names and prices.

        The 24h price change applies to the first outcome; the second
        gets its negation.
        """
        try:
            names = self._decode_list(market.get("outcomes"), DEFAULT_OUTCOME_NAMES)
            prices = self._decode_list(
                market.get("outcomePrices"), [DEFAULT_PRICE] * len(names)
            )
            token_ids = self._decode_list(market.get("clobTokenIds"), [])
        except (ValueError, TypeError) as e:
            logger.debug(f"Unparsable outcomes for market {market_id!r}: {e}")
            return (
                MarketOutcome("Yes", DEFAULT_PRICE, 0.0, f"{market_id}-0"),
                MarketOutcome("No", DEFAULT_PRICE, 0.0, f"{market_id}-1"),
            )

        change = self._parse_number(market.get("oneDayPriceChange"))
        outcomes = []
        for i, name in enumerate(names):
            price = self._parse_number(prices[i], DEFAULT_PRICE) if i < len(prices) else DEFAULT_PRICE
            outcomes.append(MarketOutcome(
                name=str(name),
                price=price,
                price_change_24h=change if i == 0 else -change,
                outcome_id=str(token_ids[i]) if i < len(token_ids) else f"{market_id}-{i}",
            ))
        return tuple(outcomes)

    def _extract_category(
        self,
        market: Dict[str, Any],
        question: str,
        tags: List[str],
        event_title: Optional[str] = None,
    ) -> str:
        """
        Resolve the market category.

        The first tag overrides the record's category. Keyword inference
        runs whenever the result is still "other", including a literal
        "other" on the record.
        """
        category = str(market.get("category") or "other").lower()

        if tags:
            category = tags[0].lower()

        if category != "other":
            return category

        question_lower = question.lower()
        title_lower = (event_title or "").lower()
        for name, keywords in CATEGORY_INFERENCE_KEYWORDS:
            if any(kw in question_lower for kw in keywords):
                return name
            if any(kw in title_lower for kw in TITLE_INFERENCE_KEYWORDS.get(name, ())):
                return name
        return "other"

    def _extract_tags(self, raw_tags: Any) -> List[str]:
        """Extract tag labels from strings or {label|name|slug} dicts."""
        tags = []
        if isinstance(raw_tags, list):
            for tag in raw_tags:
                if isinstance(tag, dict):
                    tag_name = tag.get("label") or tag.get("name") or tag.get("slug")
                    if tag_name:
                        tags.append(str(tag_name))
                elif tag:
                    tags.append(str(tag))
        return tags

    @staticmethod
    def _decode_list(value: Any, default: List[Any]) -> List[Any]:
        """Decode a JSON-string list; lists pass through; empty -> default."""
        if value is None or value == "":
            return list(default)
        if isinstance(value, list):
            return value
        decoded = json.loads(value)
        if not isinstance(decoded, list):
            raise ValueError(f"expected a JSON list, got {type(decoded).__name__}")
        return decoded

    @staticmethod
    def _parse_number(value: Any, default: float = 0.0) -> float:
        """Parse numeric or numeric-string values; anything else is the default."""
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
