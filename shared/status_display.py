# =============================================================================
# POLYMARKET VERIFIER - STATUS DISPLAY
# =============================================================================
#
# Status -> (color token, label) lookup for rendering layers.
# Total over any input: unknown values map to ("neutral", "Unknown").
# No state, no side effects.
#
# =============================================================================

from typing import Tuple, Union

from .enums import VerificationStatus


UNKNOWN_DISPLAY: Tuple[str, str] = ("neutral", "Unknown")

STATUS_DISPLAY = {
    VerificationStatus.VERIFIED.value: ("success", "Verified"),
    VerificationStatus.PARTIALLY_VERIFIED.value: ("warning", "Partially Verified"),
    VerificationStatus.UNVERIFIED.value: ("danger", "Unverified"),
    VerificationStatus.PENDING.value: ("neutral", "Pending"),
}


def _display(status: Union[VerificationStatus, str, None]) -> Tuple[str, str]:
    key = status.value if isinstance(status, VerificationStatus) else status
    return STATUS_DISPLAY.get(key, UNKNOWN_DISPLAY)


def color_for(status: Union[VerificationStatus, str, None]) -> str:
    """Color token for a verification status."""
    return _display(status)[0]


def label_for(status: Union[VerificationStatus, str, None]) -> str:
    """Display label for a verification status."""
    return _display(status)[1]
