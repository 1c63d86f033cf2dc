# =============================================================================
# POLYMARKET VERIFIER - SHARED MODULE
# =============================================================================
#
# Shared utilities only. No verification logic lives here.
#
# CONTENTS:
# - Enums (shared type definitions)
# - Config loading (YAML + environment)
# - Logging and audit utilities
# - Status display mapping for renderers
#
# =============================================================================

from .enums import VerificationStatus, CheckId, NewsSentiment
from .config_loader import VerificationConfig, get_verification_config
from .logging_config import setup_logging, AuditLogger
from .status_display import color_for, label_for

__all__ = [
    "VerificationStatus",
    "CheckId",
    "NewsSentiment",
    "VerificationConfig",
    "get_verification_config",
    "setup_logging",
    "AuditLogger",
    "color_for",
    "label_for",
]
