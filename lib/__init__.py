# =============================================================================
# lib/ - Standalone Infrastructure Modules
# =============================================================================
# This package contains infrastructure shared by the app and the tests:
# - database.py: SQLAlchemy async engine, session factory, contacts table
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import MAX_CONTACT_ID, Base, ContactRow, Database

__all__ = [
    "MAX_CONTACT_ID",
    "Base",
    "ContactRow",
    "Database",
]
