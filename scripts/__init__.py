# =============================================================================
# scripts/ - Operational Commands
# =============================================================================
# - seed_admin.py: create or reset the admin account
#
# Run as modules from the project root, e.g. python -m scripts.seed_admin
# =============================================================================
