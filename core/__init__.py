# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the route collections:
# - models/: Pydantic schemas for data validation
# - services/: Supabase-backed services, one per feature
#
# Services take the Database handle as a constructor argument and never
# reach for module-level clients. This keeps them testable with a mock.
# =============================================================================
