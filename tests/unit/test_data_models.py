# =============================================================================
# UNIT TESTS - DATA MODELS
# =============================================================================
#
# Input parsing (from_dict), output validation (__post_init__) and the
# serialized output shape.
#
# =============================================================================

import json

import pytest

from models.data_models import (
    Market,
    MarketOutcome,
    NewsArticle,
    VerificationCheck,
    VerificationResult,
)
from shared.enums import NewsSentiment, VerificationStatus


def make_check(**overrides):
    fields = dict(
        check_id="liquidity",
        name="Liquidity Verification",
        description="Verifies market has sufficient trading activity",
        status=VerificationStatus.VERIFIED,
        confidence=95,
        source="Volume Analysis",
        timestamp=1768478400000,
        details="High activity",
    )
    fields.update(overrides)
    return VerificationCheck(**fields)


class TestVerificationCheck:
    """Tests for VerificationCheck."""

    @pytest.mark.parametrize("confidence", [0, 50, 100])
    def test_valid_confidence(self, confidence):
        assert make_check(confidence=confidence).confidence == confidence

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValueError, match="between 0 and 100"):
            make_check(confidence=confidence)

    @pytest.mark.parametrize("confidence", [50.0, "50", True])
    def test_confidence_must_be_int(self, confidence):
        with pytest.raises(TypeError, match="confidence must be an int"):
            make_check(confidence=confidence)

    def test_is_immutable(self):
        check = make_check()
        with pytest.raises(AttributeError):
            check.confidence = 10

    def test_to_dict(self):
        assert make_check().to_dict() == {
            "id": "liquidity",
            "name": "Liquidity Verification",
            "description": "Verifies market has sufficient trading activity",
            "status": "verified",
            "confidence": 95,
            "source": "Volume Analysis",
            "timestamp": 1768478400000,
            "details": "High activity",
        }


class TestVerificationResult:
    """Tests for VerificationResult."""

    def make_result(self, **overrides):
        fields = dict(
            overall_status=VerificationStatus.VERIFIED,
            overall_confidence=95,
            checks=(make_check(), make_check(check_id="category", status=VerificationStatus.UNVERIFIED)),
            verified_at=1768478400000,
            request_id="seda-1768478400000-abc123def",
            summary="All 1 verification checks passed.",
        )
        fields.update(overrides)
        return VerificationResult(**fields)

    def test_confidence_range_enforced(self):
        with pytest.raises(ValueError):
            self.make_result(overall_confidence=101)

    def test_lookup_and_counts(self):
        result = self.make_result()
        assert result.check("category").status == VerificationStatus.UNVERIFIED
        assert result.check("missing") is None
        assert result.verified_count == 1

    def test_to_json_round_trips_through_json(self):
        data = json.loads(self.make_result().to_json())
        assert data["overallStatus"] == "verified"
        assert data["requestId"] == "seda-1768478400000-abc123def"
        assert [c["id"] for c in data["checks"]] == ["liquidity", "category"]


class TestMarketFromDict:
    """Tests for Market.from_dict."""

    def test_flat_shape(self):
        market = Market.from_dict({
            "id": "m-1",
            "question": "Will BTC hit $200k in 2026?",
            "category": "crypto",
            "outcomes": [
                {"id": "t1", "name": "Yes", "price": 0.2, "priceChange24h": 0.01},
                {"id": "t2", "name": "No", "price": "0.8"},
            ],
            "volume": "125000.5",
            "liquidity": 9000,
            "endDate": "2026-12-31T23:59:59Z",
            "tags": ["Crypto", "Bitcoin"],
        })
        assert market.market_id == "m-1"
        assert market.outcomes[0] == MarketOutcome("Yes", 0.2, 0.01, "t1")
        assert market.outcomes[1].price == 0.8
        assert market.outcomes[1].price_change_24h is None
        assert market.volume == 125000.5
        assert market.end_date == "2026-12-31T23:59:59Z"
        assert market.tags == ("Crypto", "Bitcoin")

    def test_snake_case_keys(self):
        market = Market.from_dict({"market_id": "m-2", "end_date": "2026-05-01"})
        assert market.market_id == "m-2"
        assert market.end_date == "2026-05-01"

    def test_missing_fields_default_empty(self):
        market = Market.from_dict({})
        assert market.market_id == ""
        assert market.question == ""
        assert market.outcomes == ()
        assert market.volume == 0.0
        assert market.end_date is None

    def test_to_dict_keeps_camel_case(self):
        market = Market.from_dict({"id": "m-3", "endDate": "2026-05-01"})
        data = market.to_dict()
        assert data["id"] == "m-3"
        assert data["endDate"] == "2026-05-01"


class TestNewsArticleFromDict:
    """Tests for NewsArticle.from_dict."""

    def test_news_search_shape(self):
        article = NewsArticle.from_dict({
            "title": "Fed holds rates",
            "description": "...",
            "source": "Reuters",
            "url": "https://example.com/a",
            "publishedAt": "2026-01-10T08:00:00Z",
            "relevanceScore": 0.8,
            "sentiment": "negative",
        })
        assert article.source == "Reuters"
        assert article.sentiment == NewsSentiment.NEGATIVE
        assert article.published_at == "2026-01-10T08:00:00Z"

    def test_sentiment_case_insensitive(self):
        assert NewsArticle.from_dict({"source": "AP", "sentiment": "POSITIVE"}).sentiment \
            == NewsSentiment.POSITIVE

    def test_missing_sentiment_rejected(self):
        with pytest.raises(ValueError):
            NewsArticle.from_dict({"source": "AP", "title": "Stocks rally"})

    def test_nested_source_rejected(self):
        with pytest.raises(TypeError):
            NewsArticle.from_dict({"source": {"name": "AP"}, "sentiment": "neutral"})

    def test_unknown_sentiment_rejected(self):
        with pytest.raises(ValueError):
            NewsArticle.from_dict({"source": "AP", "sentiment": "ecstatic"})
