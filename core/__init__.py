# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the contact manager's business logic:
# - models/: Pydantic schemas for the API contract
# - validation.py: The shared field rule table (server and client)
# - services/: ContactService (CRUD + email uniqueness)
#
# Only services/ touches the database; models/ and validation.py are pure
# and are reused by the client package.
# =============================================================================
