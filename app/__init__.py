# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App factory, middleware chain, error handlers, route table
# - config.py: Environment variable loading and settings
# - context.py: Application context shared by all handlers
# - middleware.py: JSON and URL-encoded body parsing
# - routers/: API endpoint definitions organized by feature
# - run.py: uvicorn entry point
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
