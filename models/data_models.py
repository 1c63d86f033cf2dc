# =============================================================================
# POLYMARKET VERIFIER
# Module: models/data_models.py
# Purpose: Define all data structures for the verification pipeline
# =============================================================================
#
# AUDIT NOTE:
# - Inputs (Market, NewsArticle) are read-only snapshots supplied by the
#   caller. They are NOT validated on construction: judging whether the
#   market data is consistent is the engine's job, not the model's.
# - Outputs (VerificationCheck, VerificationResult) are frozen after
#   creation and fully serializable to JSON for audit trails.
# - Serialized output uses camelCase keys; downstream renderers depend on
#   that exact shape.
#
# =============================================================================

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any, Tuple, Union

from shared.enums import VerificationStatus, NewsSentiment


# =============================================================================
# INPUT MODELS
# =============================================================================

@dataclass(frozen=True)
class MarketOutcome:
    """
    One resolvable answer to a market's question.

    FIELDS:
    - name: Display name ("Yes" / "No" for binary markets)
    - price: Probability-like price, expected in [0, 1]
    - price_change_24h: Optional 24-hour price change
    - outcome_id: Optional token / outcome identifier
    """
    name: str
    price: float
    price_change_24h: Optional[float] = None
    outcome_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketOutcome":
        change = data.get("priceChange24h", data.get("price_change_24h"))
        return cls(
            name=str(data.get("name", "")),
            price=float(data.get("price", 0.0)),
            price_change_24h=float(change) if change is not None else None,
            outcome_id=data.get("id", data.get("outcome_id")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.outcome_id,
            "name": self.name,
            "price": self.price,
            "priceChange24h": self.price_change_24h,
        }


@dataclass(frozen=True)
class Market:
    """
    Prediction-market snapshot as supplied by the caller.

    FIELDS:
    - market_id: Market identifier (may be empty; scored, not rejected)
    - question: Market question text
    - category: Category label (politics, crypto, sports, ...)
    - outcomes: Ordered outcomes; outcomes[0] is YES on binary markets
    - volume: Total traded volume in USD
    - liquidity: Current liquidity in USD
    - end_date: Resolution end date/time, ISO-8601 string or datetime.
      Parsed by the resolution-date check so a malformed value only
      degrades that one check.
    """
    market_id: str
    question: str
    category: str
    outcomes: Tuple[MarketOutcome, ...]
    volume: float = 0.0
    liquidity: float = 0.0
    end_date: Union[str, datetime, None] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Market":
        """
        Build a Market from the flat JSON shape.

        Accepts both camelCase (id, endDate) and snake_case
        (market_id, end_date) keys.
        """
        outcomes = tuple(
            MarketOutcome.from_dict(o) for o in data.get("outcomes") or []
        )
        return cls(
            market_id=str(data.get("id", data.get("market_id", "")) or ""),
            question=str(data.get("question", "") or ""),
            category=str(data.get("category", "") or ""),
            outcomes=outcomes,
            volume=float(data.get("volume") or 0.0),
            liquidity=float(data.get("liquidity") or 0.0),
            end_date=data.get("endDate", data.get("end_date")),
            slug=data.get("slug"),
            description=data.get("description"),
            tags=tuple(data.get("tags") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        end_date = self.end_date
        if isinstance(end_date, datetime):
            end_date = end_date.isoformat()
        return {
            "id": self.market_id,
            "question": self.question,
            "category": self.category,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "volume": self.volume,
            "liquidity": self.liquidity,
            "endDate": end_date,
            "slug": self.slug,
            "description": self.description,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class NewsArticle:
    """
    News item related to a market.

    Only `source` and `sentiment` are read by the engine.
    """
    source: str
    sentiment: NewsSentiment
    title: str = ""
    description: str = ""
    url: str = ""
    published_at: Optional[str] = None
    relevance_score: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewsArticle":
        """
        Build from an already-labelled article dict.

        Raw provider articles (no sentiment label, nested source) go
        through collector.news_normalizer.NewsNormalizer instead.

        Raises:
            ValueError: If sentiment is missing or not a known label
            TypeError: If source is not a string
        """
        sentiment = data.get("sentiment")
        if not sentiment:
            raise ValueError("Article has no sentiment label")
        source = data.get("source", "")
        if not isinstance(source, str):
            raise TypeError(f"Article source must be a string, got {type(source).__name__}")
        return cls(
            source=source,
            sentiment=NewsSentiment(str(sentiment).lower()),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            url=str(data.get("url", "")),
            published_at=data.get("publishedAt", data.get("published_at")),
            relevance_score=float(data.get("relevanceScore", 0.0) or 0.0),
        )


# =============================================================================
# OUTPUT MODELS
# =============================================================================

@dataclass(frozen=True)
class VerificationCheck:
    """
    Result of one verification heuristic.

    Created once by its check function and never mutated.

    FIELDS:
    - check_id: Stable short code (see shared.enums.CheckId)
    - name / description: Display text for the check
    - status: Outcome of the check
    - confidence: Integer 0-100
    - source: Provenance label
    - timestamp: Creation instant, epoch milliseconds
    - details: Human-readable report of the computed signal
    """
    check_id: str
    name: str
    description: str
    status: VerificationStatus
    confidence: int
    source: str
    timestamp: int
    details: Optional[str] = None

    def __post_init__(self):
        """Validate fields after initialization."""
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, int):
            raise TypeError(
                f"confidence must be an int, "
                f"got {type(self.confidence).__name__}"
            )
        if not 0 <= self.confidence <= 100:
            raise ValueError(
                f"confidence must be between 0 and 100, got {self.confidence}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.check_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "confidence": self.confidence,
            "source": self.source,
            "timestamp": self.timestamp,
            "details": self.details,
        }


@dataclass(frozen=True)
class VerificationResult:
    """
    Aggregated trust assessment for one market.

    INVARIANTS:
    - checks holds the six check records in fixed check order
    - overall_confidence is the rounded mean of the check confidences,
      whichever status bucket was chosen
    - request_id is unique per call and has no meaning across calls
    """
    overall_status: VerificationStatus
    overall_confidence: int
    checks: Tuple[VerificationCheck, ...]
    verified_at: int
    request_id: str
    summary: str

    def __post_init__(self):
        if not 0 <= self.overall_confidence <= 100:
            raise ValueError(
                f"overall_confidence must be between 0 and 100, "
                f"got {self.overall_confidence}"
            )

    @property
    def verified_count(self) -> int:
        return sum(1 for c in self.checks if c.status == VerificationStatus.VERIFIED)

    def check(self, check_id: str) -> Optional[VerificationCheck]:
        """Look up a check record by its short code."""
        for c in self.checks:
            if c.check_id == check_id:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "overallStatus": self.overall_status.value,
            "overallConfidence": self.overall_confidence,
            "checks": [c.to_dict() for c in self.checks],
            "verifiedAt": self.verified_at,
            "requestId": self.request_id,
            "summary": self.summary,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
