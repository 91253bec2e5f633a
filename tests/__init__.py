# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio API:
# - test_validators.py / test_sanitizer.py: field validation and HTML cleaning
# - test_exceptions.py: error envelope and normalizer
# - test_auth.py: tokens, require_admin and login
# - test_*_api.py: end-to-end resource tests through TestClient
# - test_uploads.py: image upload pipeline
# - test_config.py / test_seed.py: settings and admin seeding
#
# Run tests with: pytest
# =============================================================================
