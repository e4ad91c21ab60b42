# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan and process entry point
# - gateway.py: Middleware chain, mounting, fallbacks in a fixed stage order
# - middleware.py / parsers.py: Body limits, request logging, body decoding
# - config.py: Environment variable loading and settings
# - exceptions.py: Error types and JSON error handlers
# - auth/ and routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
