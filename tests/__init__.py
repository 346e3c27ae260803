# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Tutorials API:
# - test_config.py: Settings and PORT resolution
# - test_urlencoded.py: Nested URL-encoded body parser
# - test_middleware.py: Body-parsing middleware chain
# - test_database.py: Background connection handle
# - test_tutorial_service.py: Tutorial business logic
# - test_main.py: Welcome route, startup and database independence
# - test_tutorials_api.py: Tutorial CRUD endpoints
# - test_health.py: Health endpoints
# - test_run.py: HTTP listener entry point
#
# Run tests with: poetry run pytest
# =============================================================================
