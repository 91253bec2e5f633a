# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: create_app(), middleware setup, router mounting
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and the single error normalizer
# - dependencies.py: Request-scoped dependencies (session, storage, body)
# - auth/: Admin tokens, login and the require_admin dependency
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
