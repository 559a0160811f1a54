# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase clients for the in-memory fake in tests/fakes.py;
#   per-user clients share its data but carry the caller's token
# - Provides seeded creator and viewer accounts
# =============================================================================

import os
import sys

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing kalakar.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")

sys.path.insert(0, os.path.dirname(__file__))

import pytest
from fastapi.testclient import TestClient

from fakes import FakeSupabase
from kalakar.core import inflight
from kalakar.database.supabase_client import get_supabase, get_service_supabase, get_client_factory
from kalakar.main import app
from kalakar.modules.auth.service import clear_auth_cache


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_state():
    """Auth cache and in-flight registry are process-wide; isolate each test."""
    clear_auth_cache()
    inflight._in_flight.clear()
    yield
    clear_auth_cache()
    inflight._in_flight.clear()


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    # No service role key: sign-up writes profile rows as the new user
    app.dependency_overrides[get_service_supabase] = lambda: None
    app.dependency_overrides[get_client_factory] = lambda: fake_supabase.session_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def creator(fake_supabase):
    """A pottery creator from Jaipur"""
    return fake_supabase.add_account(
        "meera@example.com",
        "Meera Sharma",
        user_type="creator",
        bio="Hand-thrown pottery and glazed ceramics",
        city="Jaipur",
        state="Rajasthan",
        phone="+91 98765 43210",
        whatsapp="+91 98765 43210",
        categories=["Pottery", "Painting"],
    )


@pytest.fixture
def viewer(fake_supabase):
    return fake_supabase.add_account("ravi@example.com", "Ravi Kumar")
