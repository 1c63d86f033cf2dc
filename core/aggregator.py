# =============================================================================
# POLYMARKET VERIFIER
# Module: core/aggregator.py
# Purpose: Combine individual check results into one overall verdict
# =============================================================================
#
# RULES:
# - Confidence: rounded arithmetic mean of all check confidences,
#   computed the same way whichever status is chosen
# - Status:
#     verified fraction >= 0.8                    -> VERIFIED
#     verified + partially verified fraction >= 0.6 -> PARTIALLY_VERIFIED
#     otherwise                                    -> UNVERIFIED
# - No checks at all -> UNVERIFIED with confidence 0
#
# ROUNDING:
# Halves round up (50.5 -> 51), not to even.
#
# =============================================================================

import math
from dataclasses import dataclass
from typing import Sequence

from models.data_models import VerificationCheck
from shared.enums import VerificationStatus


VERIFIED_FRACTION_THRESHOLD: float = 0.8
COVERED_FRACTION_THRESHOLD: float = 0.6


@dataclass(frozen=True)
class AggregateVerdict:
    """Overall status and confidence derived from a list of checks."""
    status: VerificationStatus
    confidence: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mean_confidence(checks: Sequence[VerificationCheck]) -> int:
    """Rounded mean confidence, 0 for an empty list."""
    if not checks:
        return 0
    return round_half_up(sum(c.confidence for c in checks) / len(checks))


def aggregate(checks: Sequence[VerificationCheck]) -> AggregateVerdict:
    """
    Derive the overall verdict from the check results.

    Args:
        checks: Check records (normally exactly six)

    Returns:
        AggregateVerdict
    """
    if not checks:
        return AggregateVerdict(VerificationStatus.UNVERIFIED, 0)

    total = len(checks)
    verified = sum(1 for c in checks if c.status == VerificationStatus.VERIFIED)
    partial = sum(1 for c in checks if c.status == VerificationStatus.PARTIALLY_VERIFIED)
    confidence = mean_confidence(checks)

    if verified / total >= VERIFIED_FRACTION_THRESHOLD:
        status = VerificationStatus.VERIFIED
    elif (verified + partial) / total >= COVERED_FRACTION_THRESHOLD:
        status = VerificationStatus.PARTIALLY_VERIFIED
    else:
        status = VerificationStatus.UNVERIFIED

    return AggregateVerdict(status, confidence)
