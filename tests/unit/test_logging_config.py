# =============================================================================
# UNIT TESTS - LOGGING CONFIGURATION
# =============================================================================

import json
import logging

from shared.logging_config import AuditLogger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_console_only_by_default(self):
        assert setup_logging(level="DEBUG") is None
        logger = logging.getLogger("core")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_output(self, tmp_path):
        log_file = setup_logging(level=logging.INFO, console_output=False,
                                 file_output=True, log_root=tmp_path)
        assert log_file.parent == tmp_path / "verification"
        logging.getLogger("core.test").info("hello from test")
        for handler in logging.getLogger("core").handlers:
            handler.flush()
        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("shared").handlers) == 1

    def test_unknown_level_name_defaults_to_info(self):
        setup_logging(level="LOUD")
        assert logging.getLogger("core").level == logging.INFO


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_hash_is_order_independent(self):
        assert AuditLogger.compute_hash({"a": 1, "b": 2}) == AuditLogger.compute_hash({"b": 2, "a": 1})

    def test_log_verification_writes_json_line(self, tmp_path):
        audit = AuditLogger(audit_dir=tmp_path)
        audit.log_verification(
            market_id="m-1",
            result={
                "requestId": "r-1",
                "overallStatus": "unverified",
                "overallConfidence": 18,
                "checks": [{"id": "liquidity", "status": "unverified", "confidence": 40}],
            },
        )
        record = json.loads(audit.audit_file.read_text(encoding="utf-8").strip())
        assert record["request_id"] == "r-1"
        assert record["checks"] == {"liquidity": {"status": "unverified", "confidence": 40}}
        assert record["input_hash"] is None
