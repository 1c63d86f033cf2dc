# =============================================================================
# POLYMARKET VERIFIER
# Module: core/check_runner.py
# Purpose: Run all verification checks concurrently and join the results
# =============================================================================
#
# SCHEDULING:
# - One worker per check, one pool per call. The check set is closed, so
#   there is no queue and no dynamic sizing.
# - Exactly one join point: wait() on all futures. Nothing is aggregated
#   until every check has produced a record.
# - No timeout and no cancellation; checks do no I/O.
#
# ISOLATION:
# A fault in one check degrades that check to unverified/0. The other
# checks are unaffected and the runner itself never raises.
#
# =============================================================================

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from models.data_models import Market, NewsArticle, VerificationCheck
from .verification_checks import (
    CHECKS,
    CheckFunction,
    CheckOutcome,
    CheckSpec,
    run_check,
)

logger = logging.getLogger(__name__)


class CheckRunner:
    """
    Fans the verification checks out to a thread pool and joins them.

    Results come back in declaration order, not completion order.
    """

    def __init__(self, checks: Optional[Sequence[Tuple[CheckSpec, CheckFunction]]] = None):
        """
        Args:
            checks: (spec, function) pairs to run. Defaults to the six
                    standard checks; tests pass substitutes here.
        """
        self.checks: Tuple[Tuple[CheckSpec, CheckFunction], ...] = tuple(
            checks if checks is not None else CHECKS
        )

    def run_outcomes(
        self,
        market: Market,
        news: Sequence[NewsArticle],
        now: datetime,
    ) -> List[CheckOutcome]:
        """
        Run every check and return the tagged outcomes in declaration order.

        Args:
            market: Market snapshot (read-only)
            news: Related news articles (read-only, may be empty)
            now: Reference instant shared by all checks

        Returns:
            One CheckOutcome per configured check
        """
        if not self.checks:
            return []

        news = tuple(news)

        with ThreadPoolExecutor(
            max_workers=len(self.checks),
            thread_name_prefix="verify-check",
        ) as pool:
            futures = [
                pool.submit(run_check, spec, func, market, news, now)
                for spec, func in self.checks
            ]
            wait(futures)

        outcomes: List[CheckOutcome] = []
        for (spec, _), future in zip(self.checks, futures):
            error = future.exception()
            if error is not None:
                # run_check already isolates ordinary faults; this only
                # catches failures inside the isolation layer itself.
                logger.error(f"Check '{spec.check_id.value}' escaped isolation: {error}")
                outcomes.append(CheckOutcome.failed(spec, now, f"{type(error).__name__}: {error}"))
            else:
                outcomes.append(future.result())

        degraded = [o.check.check_id for o in outcomes if o.degraded]
        if degraded:
            logger.warning(f"{len(degraded)}/{len(outcomes)} checks degraded: {degraded}")
        logger.debug(f"Ran {len(outcomes)} checks for market {market.market_id!r}")
        return outcomes

    def run(
        self,
        market: Market,
        news: Sequence[NewsArticle],
        now: datetime,
    ) -> List[VerificationCheck]:
        """Run every check and return the check records in declaration order."""
        return [o.check for o in self.run_outcomes(market, news, now)]
