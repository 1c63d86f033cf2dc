# =============================================================================
# POLYMARKET VERIFIER
# Module: collector/news_normalizer.py
# Purpose: Normalize raw news search articles into NewsArticle objects
# =============================================================================
#
# PROVIDER QUIRKS:
# - "source" is either a plain string or an object {name, domain}
# - the link is "url" or "articleUrl", the date "publishedAt" or "pubDate"
# - most articles carry no sentiment label
#
# SENTIMENT:
# An explicit label is used as-is. Without one, sentiment is inferred from
# title + description with a word-list heuristic: +1 per positive word
# present, -1 per negative word present, sign of the total decides.
# Matching is by substring, so "gains" counts as "gain".
#
# =============================================================================

import logging
from typing import Dict, Any, List, Optional

from models.data_models import NewsArticle
from shared.enums import NewsSentiment

logger = logging.getLogger(__name__)


POSITIVE_WORDS = (
    "gain", "rise", "win", "success", "growth", "increase", "positive",
    "bullish", "rally", "surge", "boost", "improve", "strong", "beat", "exceed",
)
NEGATIVE_WORDS = (
    "loss", "fall", "lose", "failure", "decline", "decrease", "negative",
    "bearish", "crash", "drop", "risk", "concern", "weak", "fear", "miss", "plunge",
)

UNKNOWN_SOURCE = "Unknown Source"


def analyze_sentiment(text: str) -> NewsSentiment:
    """Classify text as positive, negative or neutral by word counts."""
    text_lower = (text or "").lower()
    score = sum(1 for word in POSITIVE_WORDS if word in text_lower)
    score -= sum(1 for word in NEGATIVE_WORDS if word in text_lower)

    if score > 0:
        return NewsSentiment.POSITIVE
    if score < 0:
        return NewsSentiment.NEGATIVE
    return NewsSentiment.NEUTRAL


class NewsNormalizer:
    """
    Normalizes raw news search articles into NewsArticle records.
    """

    def normalize(self, article: Dict[str, Any]) -> NewsArticle:
        """
        Normalize a single raw article.

        Args:
            article: Raw article dictionary

        Returns:
            NewsArticle record

        Raises:
            ValueError: If an explicit sentiment label is not recognised
        """
        title = str(article.get("title") or "")
        description = str(article.get("description") or "")

        return NewsArticle(
            source=self._extract_source(article.get("source")),
            sentiment=self._extract_sentiment(article, title, description),
            title=title,
            description=description,
            url=str(article.get("url") or article.get("articleUrl") or ""),
            published_at=(
                article.get("publishedAt")
                or article.get("pubDate")
                or article.get("published_at")
            ),
            relevance_score=self._parse_score(
                article.get("relevanceScore", article.get("relevance_score"))
            ),
        )

    def normalize_many(self, articles: List[Dict[str, Any]]) -> List[NewsArticle]:
        """Normalize multiple raw articles."""
        return [self.normalize(a) for a in articles]

    def _extract_source(self, source: Any) -> str:
        """Source name from a string or a {name, domain} object."""
        if isinstance(source, dict):
            source = source.get("name") or source.get("domain")
        if not source:
            return UNKNOWN_SOURCE
        return str(source)

    def _extract_sentiment(
        self,
        article: Dict[str, Any],
        title: str,
        description: str,
    ) -> NewsSentiment:
        label: Optional[Any] = article.get("sentiment")
        if label:
            return NewsSentiment(str(label).lower())

        sentiment = analyze_sentiment(f"{title} {description}")
        logger.debug(f"Inferred {sentiment.value} sentiment for {title[:60]!r}")
        return sentiment

    @staticmethod
    def _parse_score(value: Any) -> float:
        if value is None or value == "":
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0
