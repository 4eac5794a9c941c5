# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Contact Manager:
# - test_validation.py: The shared field rule table
# - test_models.py: Pydantic schema behaviour
# - test_contact_service.py: CRUD, uniqueness and concurrency against SQLite
# - test_api.py: REST endpoints through FastAPI's TestClient
# - test_client.py: Client API wrapper, UI state and rendering
# - test_config.py: Settings and exception bodies
#
# Run tests with: pytest
# =============================================================================
