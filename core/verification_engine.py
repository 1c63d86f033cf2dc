# =============================================================================
# POLYMARKET VERIFIER
# Module: core/verification_engine.py
# Purpose: Entry point - run checks, aggregate, summarize
# =============================================================================
#
# PIPELINE:
# 1. Read the clock once (naive is taken as UTC); every check shares
#    that reference instant
# 2. CheckRunner: six checks in parallel, single join
# 3. Aggregator: overall status + confidence
# 4. Summary: one sentence
# 5. Stamp request id and timestamp, return VerificationResult
#
# DETERMINISM:
# The clock and the request id generator are injected. With both frozen,
# verify() is a pure function of (market, news).
#
# TOTALITY:
# verify() never raises for a structurally present Market. Failure to
# verify is reported as data (status/confidence), not as an exception.
#
# =============================================================================

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from models.data_models import Market, NewsArticle, VerificationResult
from shared.config_loader import VerificationConfig, get_verification_config
from shared.logging_config import AuditLogger
from .aggregator import aggregate
from .check_runner import CheckRunner
from .summary_generator import generate_summary
from .verification_checks import as_utc, to_epoch_ms

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdGenerator = Callable[[datetime], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_request_id_generator(prefix: str = "seda") -> IdGenerator:
    """
    Build a request id generator: "<prefix>-<epoch ms>-<9 hex chars>".

    The id is opaque and only unique per call.
    """
    def generate(now: datetime) -> str:
        return f"{prefix}-{to_epoch_ms(now)}-{uuid.uuid4().hex[:9]}"
    return generate


class VerificationEngine:
    """
    Runs the verification battery for one market at a time.

    Holds no per-call state; one instance can serve concurrent callers.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        config: Optional[VerificationConfig] = None,
        runner: Optional[CheckRunner] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the engine.

        Args:
            clock: Returns the current instant (defaults to UTC wall clock)
            id_generator: Builds a request id from the call instant
                          (defaults to prefix from config + random suffix)
            config: Verifier config (defaults to the global instance)
            runner: CheckRunner (defaults to the six standard checks)
            audit_logger: Audit sink; created from config when audit is enabled
        """
        self.config = config or get_verification_config()
        self.clock = clock or utc_now
        self.id_generator = id_generator or make_request_id_generator(
            self.config.request_id_prefix
        )
        self.runner = runner or CheckRunner()
        if audit_logger is None and self.config.audit_enabled:
            audit_logger = AuditLogger()
        self.audit_logger = audit_logger

    def verify(
        self,
        market: Market,
        news: Optional[Sequence[NewsArticle]] = None,
    ) -> VerificationResult:
        """
        Verify a market against the full check battery.

        Args:
            market: Market snapshot
            news: Related news articles; None or empty is valid

        Returns:
            VerificationResult with the checks in fixed order
        """
        news = tuple(news or ())
        now = as_utc(self.clock())
        request_id = self.id_generator(now)

        logger.info(f"Starting verification for market {market.market_id!r} ({request_id})")

        checks = self.runner.run(market, news, now)
        verdict = aggregate(checks)
        summary = generate_summary(checks, verdict.status)

        result = VerificationResult(
            overall_status=verdict.status,
            overall_confidence=verdict.confidence,
            checks=tuple(checks),
            verified_at=to_epoch_ms(now),
            request_id=request_id,
            summary=summary,
        )

        logger.info(
            f"Verification complete for {market.market_id!r}: "
            f"{verdict.status.value} ({verdict.confidence}% confidence)"
        )

        if self.audit_logger is not None:
            try:
                self.audit_logger.log_verification(
                    market_id=market.market_id,
                    result=result.to_dict(),
                    input_data=market.to_dict(),
                )
            except OSError as e:
                logger.error(f"Failed to write audit record for {request_id}: {e}")

        return result


def verify_market(
    market: Market,
    news: Optional[Sequence[NewsArticle]] = None,
) -> VerificationResult:
    """Convenience wrapper: verify with a default engine."""
    return VerificationEngine().verify(market, news)
