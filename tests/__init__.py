# =============================================================================
# POLYMARKET VERIFIER - TEST SUITE
# =============================================================================
#
# Structure:
#   tests/
#     unit/           - Checks, runner, aggregation, models, config, logging
#     integration/    - CLI end to end (files in, JSON + report out)
#     stress/         - Seeded randomized sweeps over checks and markets
#
# Usage:
#   pytest                    # All tests
#   pytest tests/unit         # Unit tests only
#
# =============================================================================
