# =============================================================================
# UNIT TESTS - STATUS DISPLAY
# =============================================================================

import pytest

from shared.enums import VerificationStatus
from shared.status_display import color_for, label_for


class TestStatusDisplay:
    """Status -> (color, label) lookup."""

    @pytest.mark.parametrize("status,color,label", [
        (VerificationStatus.VERIFIED, "success", "Verified"),
        (VerificationStatus.PARTIALLY_VERIFIED, "warning", "Partially Verified"),
        (VerificationStatus.UNVERIFIED, "danger", "Unverified"),
        (VerificationStatus.PENDING, "neutral", "Pending"),
    ])
    def test_known_statuses(self, status, color, label):
        assert color_for(status) == color
        assert label_for(status) == label

    def test_raw_strings_accepted(self):
        assert color_for("partially_verified") == "warning"
        assert label_for("verified") == "Verified"

    @pytest.mark.parametrize("status", ["", "VERIFIED", "bogus", None, 42])
    def test_anything_else_is_unknown(self, status):
        assert color_for(status) == "neutral"
        assert label_for(status) == "Unknown"
