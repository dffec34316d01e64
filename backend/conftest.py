"""
Shared pytest configuration for the backend test suites.

Domain fixtures (users, services, vouchers, orders, authenticated clients)
live in core_backend/tests/fixtures.py and are re-exported here so every
app's tests can request them by name.
"""
import pytest


@pytest.fixture
def api_client():
    """Unauthenticated DRF client."""
    from rest_framework.test import APIClient
    return APIClient()


from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
