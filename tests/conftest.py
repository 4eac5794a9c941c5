# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Gives every test its own SQLite database file
# - Provides an API TestClient and a helper for driving the async service
# =============================================================================

import asyncio
import os
from contextlib import asynccontextmanager

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("API_PREFIX", "/api")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_contacts.db")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from core.services.contact_service import ContactService
from lib.database import Database


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def database_url(tmp_path):
    """A fresh SQLite database file for one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}"


@pytest.fixture
def client(database_url):
    """API client; entering the context runs startup (table creation)."""
    with TestClient(create_app(database_url)) as test_client:
        yield test_client


@pytest.fixture
def run_service(database_url):
    """
    Run an async scenario against a ContactService.

    The scenario receives a factory that opens a new service (own session)
    each time it is called, so concurrent requests can be simulated.

    Usage:
        async def scenario(open_service):
            async with open_service() as service:
                ...
        run_service(scenario)
    """
    def runner(scenario):
        async def main():
            database = Database(database_url)
            await database.create_tables()

            @asynccontextmanager
            async def open_service():
                async with database.session() as session:
                    yield ContactService(session)

            try:
                return await scenario(open_service)
            finally:
                await database.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def ann():
    """The example contact used throughout the tests."""
    return {
        "firstName": "Ann",
        "lastName": "Lee",
        "address": "1 Main St",
        "email": "ann@example.com",
        "phone": "+12025550123",
    }


@pytest.fixture
def bob():
    return {
        "firstName": "Bob",
        "lastName": "Stone",
        "address": "22 Oak Ave",
        "email": "bob@example.com",
        "phone": "(415) 555-0199",
    }


def make_contact(first: str, last: str, email: str | None = None, phone: str = "2025550100") -> dict:
    """Build a valid contact payload."""
    return {
        "firstName": first,
        "lastName": last,
        "address": f"{first} Street 1",
        "email": email or f"{first.lower()}.{last.lower()}@example.com",
        "phone": phone,
    }
