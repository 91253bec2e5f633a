# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - validators.py: field validators, pagination and search parsing
# - sanitizer.py: allow-list HTML sanitizer for rich-text fields
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================
