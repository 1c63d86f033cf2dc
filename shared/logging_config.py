# =============================================================================
# POLYMARKET VERIFIER - LOGGING CONFIGURATION
# =============================================================================
#
# Operational logs go to logs/verification/ (optional) and the console.
# Audit records go to logs/audit/ as JSON lines, one per verification.
#
# Library modules only ever call logging.getLogger(__name__); handlers are
# attached here, by the entry point.
#
# =============================================================================

import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


LOGGER_NAMES = ("core", "shared", "models", "collector", "verification")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_project_root() -> Path:
    """Get the project root directory."""
    # This file is at shared/logging_config.py
    return Path(__file__).parent.parent


def _get_log_dir(log_root: Optional[Path] = None) -> Path:
    """Get the operational log directory."""
    root = log_root or (_get_project_root() / "logs")
    return root / "verification"


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    level: Union[int, str] = logging.INFO,
    console_output: bool = True,
    file_output: bool = False,
    log_root: Optional[Path] = None,
) -> Optional[Path]:
    """
    Configure logging for the verifier packages.

    Args:
        level: Logging level (int or name such as "DEBUG")
        console_output: Whether to log to console
        file_output: Whether to log to a timestamped file
        log_root: Base log directory (defaults to <project>/logs)

    Returns:
        Path of the log file, or None when file output is off
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    log_file = None
    if file_output:
        log_dir = _get_log_dir(log_root)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"verification_{timestamp}.log"

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_file is not None:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logging.getLogger("verification").debug(
        f"Logging initialized (level={logging.getLevelName(level)}, file={log_file})"
    )
    return log_file


# =============================================================================
# AUDIT LOGGING
# =============================================================================

class AuditLogger:
    """
    Special logger for audit-grade verification records.

    Audit logs are:
    - Always written to file
    - JSON lines, one record per verification
    - Stored separately from operational logs
    - Include a SHA-256 hash of the market input for traceability
    """

    def __init__(self, audit_dir: Optional[Path] = None):
        self.audit_dir = audit_dir or (_get_project_root() / "logs" / "audit")
        self._setup_audit_logger()

    def _setup_audit_logger(self) -> None:
        """Set up the audit logger with a dedicated file."""
        self.audit_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        self.audit_file = self.audit_dir / f"audit_verification_{timestamp}.jsonl"

        self.logger = logging.getLogger("audit.verification")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        handler = logging.FileHandler(self.audit_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.logger.addHandler(handler)

    @staticmethod
    def compute_hash(data: dict) -> str:
        """
        Compute SHA-256 hash of input data for traceability.

        Args:
            data: Dictionary to hash

        Returns:
            Hex-encoded SHA-256 hash
        """
        # Serialize deterministically (sorted keys, no whitespace)
        serialized = json.dumps(data, sort_keys=True, separators=(',', ':'), default=str)
        return hashlib.sha256(serialized.encode('utf-8')).hexdigest()

    def log_verification(
        self,
        market_id: str,
        result: dict,
        input_data: Optional[dict] = None,
    ) -> None:
        """
        Log a verification result for audit.

        Args:
            market_id: Identifier of the verified market
            result: Serialized VerificationResult
            input_data: Optional market input to hash for traceability
        """
        input_hash = None
        if input_data is not None:
            input_hash = self.compute_hash(input_data)

        record = {
            "timestamp": datetime.now().isoformat(),
            "event": "VERIFICATION",
            "market_id": market_id,
            "request_id": result.get("requestId"),
            "overall_status": result.get("overallStatus"),
            "overall_confidence": result.get("overallConfidence"),
            "checks": {
                c["id"]: {"status": c["status"], "confidence": c["confidence"]}
                for c in result.get("checks", [])
            },
            "input_hash": input_hash,
        }
        self.logger.info(json.dumps(record, ensure_ascii=False))
