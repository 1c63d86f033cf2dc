# =============================================================================
# POLYMARKET VERIFIER - CONFIG LOADER
# =============================================================================
#
# Centralized configuration for the verifier.
# Reads config/verification.yaml, then applies overrides from the
# environment (.env is loaded first, without clobbering real env vars).
#
# USAGE:
#   from shared.config_loader import get_verification_config
#
#   config = get_verification_config()
#   prefix = config.request_id_prefix
#
# NOTE:
# Check thresholds are deliberately absent from this file. They are the
# verification contract and live in core/verification_checks.py.
#
# =============================================================================

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Base directory
BASE_DIR = Path(__file__).parent.parent
CONFIG_PATH = BASE_DIR / "config" / "verification.yaml"
ENV_PATH = BASE_DIR / ".env"

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "log_to_file": False,
    "request_id_prefix": "seda",
    "audit_enabled": False,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "VERIFICATION_LOG_LEVEL": "log_level",
    "VERIFICATION_LOG_TO_FILE": "log_to_file",
    "VERIFICATION_REQUEST_ID_PREFIX": "request_id_prefix",
    "VERIFICATION_AUDIT_ENABLED": "audit_enabled",
}

_BOOL_KEYS = {"log_to_file", "audit_enabled"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class VerificationConfig:
    """
    Read-only verifier configuration.

    Missing or unreadable YAML falls back to DEFAULTS with a warning;
    configuration problems never stop a verification from running.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize verifier configuration.

        Args:
            config_path: Path to verification.yaml. Defaults to config/verification.yaml
            env: Environment mapping for overrides. Defaults to os.environ
                 (after loading .env).
        """
        self.config_path = config_path or CONFIG_PATH
        if env is None:
            load_dotenv(ENV_PATH, override=False)
            env = dict(os.environ)
        self._env = env
        self._config: Dict[str, Any] = dict(DEFAULTS)
        self._load_config()

    def _load_config(self):
        """Load configuration from YAML file, then apply env overrides."""
        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}, using defaults")
        else:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    raw = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load config: {e}")
                raw = {}

            section = raw.get("verification", {}) if isinstance(raw, dict) else {}
            if not isinstance(section, dict):
                logger.warning("'verification' section is not a mapping, ignoring")
                section = {}

            for key, value in section.items():
                if key not in DEFAULTS:
                    logger.warning(f"Unknown config key '{key}' ignored")
                    continue
                self._config[key] = value

        for env_name, key in ENV_OVERRIDES.items():
            if env_name in self._env:
                self._config[key] = self._env[env_name]

        for key in _BOOL_KEYS:
            self._config[key] = _parse_bool(self._config[key])

    def reload(self):
        """Reload configuration from file."""
        self._config = dict(DEFAULTS)
        self._load_config()

    @property
    def log_level(self) -> str:
        """Get configured log level."""
        return str(self._config["log_level"]).upper()

    @property
    def log_to_file(self) -> bool:
        return self._config["log_to_file"]

    @property
    def request_id_prefix(self) -> str:
        return str(self._config["request_id_prefix"])

    @property
    def audit_enabled(self) -> bool:
        return self._config["audit_enabled"]

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return dict(self._config)


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

# Singleton instance
_instance: Optional[VerificationConfig] = None


def get_verification_config() -> VerificationConfig:
    """
    Get the global VerificationConfig instance.

    Returns:
        VerificationConfig singleton
    """
    global _instance
    if _instance is None:
        _instance = VerificationConfig()
    return _instance
