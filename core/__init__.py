# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - database.py: async engine, session factory, declarative Base
# - entities.py: ORM entities (Project, Category, Blog, Experience, User)
# - models/: Pydantic schemas for request validation and responses
# - services/: one service per resource plus storage and uploads
#
# Code in this package never touches requests or responses; it raises
# app.exceptions errors and leaves rendering to the HTTP layer.
# =============================================================================
