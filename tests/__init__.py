# =============================================================================
# tests/ - Test Suite
# =============================================================================
# Run with: pytest -v
# =============================================================================
