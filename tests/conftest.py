"""Global test fixtures: frozen clock, market builders, singleton reset."""
import logging
from datetime import datetime, timedelta, timezone

import pytest

from models.data_models import Market, MarketOutcome, NewsArticle
from shared.config_loader import VerificationConfig
from shared.enums import NewsSentiment
from shared.logging_config import LOGGER_NAMES


FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
FIXED_REQUEST_ID = "test-request-0001"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level singletons before and after each test."""
    _do_reset()
    yield
    _do_reset()


def _do_reset():
    import shared.config_loader as config_mod
    config_mod._instance = None


@pytest.fixture(autouse=True)
def release_log_handlers():
    """Close handlers attached by setup_logging()/AuditLogger during a test."""
    yield
    for name in LOGGER_NAMES + ("audit.verification",):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def default_config(tmp_path):
    """Config with defaults only: no YAML file, empty environment."""
    return VerificationConfig(config_path=tmp_path / "missing.yaml", env={})


@pytest.fixture
def make_market():
    """Factory for a healthy binary market; override any field by keyword."""
    def _make(prices=(0.5, 0.5), **overrides):
        fields = dict(
            market_id="0x1234-fed-cut",
            question="Will the Fed cut the interest rate before the next recession?",
            category="economy",
            outcomes=tuple(
                MarketOutcome(name, price)
                for name, price in zip(("Yes", "No", "Maybe", "Other"), prices)
            ),
            volume=250_000.0,
            liquidity=40_000.0,
            end_date=(FIXED_NOW + timedelta(days=30)).isoformat(),
        )
        fields.update(overrides)
        return Market(**fields)
    return _make


@pytest.fixture
def make_news():
    """Factory for news lists from (source, sentiment) pairs."""
    def _make(*pairs):
        return [
            NewsArticle(source=source, sentiment=NewsSentiment(sentiment))
            for source, sentiment in pairs
        ]
    return _make


@pytest.fixture
def consistent_news(make_news):
    return make_news(
        ("Reuters", "positive"),
        ("Bloomberg", "positive"),
        ("Associated Press", "positive"),
    )
