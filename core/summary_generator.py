# =============================================================================
# POLYMARKET VERIFIER
# Module: core/summary_generator.py
# Purpose: One-sentence human-readable summary of a verification
# =============================================================================
#
# The three templates are matched word-for-word by renderers and tests.
#
# =============================================================================

from typing import Sequence

from models.data_models import VerificationCheck
from shared.enums import VerificationStatus


VERIFIED_TEMPLATE = (
    "All {verified} verification checks passed. "
    "Data has been cross-referenced and validated."
)
PARTIAL_TEMPLATE = (
    "{verified} of {total} checks passed. "
    "Some data could not be fully verified."
)
UNVERIFIED_TEMPLATE = (
    "Verification incomplete. {unverified} checks could not be verified. "
    "Exercise caution."
)


def generate_summary(
    checks: Sequence[VerificationCheck],
    overall_status: VerificationStatus,
) -> str:
    """Compose the summary sentence for an overall status."""
    verified = sum(1 for c in checks if c.status == VerificationStatus.VERIFIED)
    unverified = sum(1 for c in checks if c.status == VerificationStatus.UNVERIFIED)

    if overall_status == VerificationStatus.VERIFIED:
        return VERIFIED_TEMPLATE.format(verified=verified)
    if overall_status == VerificationStatus.PARTIALLY_VERIFIED:
        return PARTIAL_TEMPLATE.format(verified=verified, total=len(checks))
    return UNVERIFIED_TEMPLATE.format(unverified=unverified)
