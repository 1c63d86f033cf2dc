# =============================================================================
# POLYMARKET VERIFIER - CORE MODULE
# =============================================================================
#
# Deterministic market verification. No I/O, no persistence.
#
# MODULES:
# - verification_checks: The six independent checks + fault isolation
# - check_runner: Parallel fan-out / single join over the checks
# - aggregator: Overall status and confidence
# - summary_generator: Human-readable summary sentence
# - verification_engine: Entry point wiring it all together
#
# =============================================================================

from .aggregator import AggregateVerdict, aggregate
from .check_runner import CheckRunner
from .summary_generator import generate_summary
from .verification_checks import CHECKS, CheckOutcome, CheckSpec, run_check
from .verification_engine import (
    VerificationEngine,
    make_request_id_generator,
    verify_market,
)

__all__ = [
    "AggregateVerdict",
    "aggregate",
    "CheckRunner",
    "generate_summary",
    "CHECKS",
    "CheckOutcome",
    "CheckSpec",
    "run_check",
    "VerificationEngine",
    "make_request_id_generator",
    "verify_market",
]
