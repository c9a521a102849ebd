"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from household.core.models import MemberRole, SplitMethod, WorkspaceType
from household.core.money import Money
from household.store import JsonWorkspaceStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def store(temp_dir) -> JsonWorkspaceStore:
    """Empty file-backed store acting as alice."""
    return JsonWorkspaceStore(temp_dir / "data", current_user="alice")


@pytest.fixture
def split_workspace(store):
    """50/50 split workspace owned by alice with bob as a member."""
    workspace = store.create_workspace(
        "Flat", WorkspaceType.SPLIT, "alice", split_method=SplitMethod.EQUAL, workspace_id="flat"
    )
    store.add_member("flat", "bob", MemberRole.MEMBER)
    return workspace


@pytest.fixture
def joint_workspace(store):
    """Joint workspace with a $2,000.00 monthly target."""
    workspace = store.create_workspace(
        "Pool", WorkspaceType.JOINT, "alice", monthly_target=Money.from_cents(200000), workspace_id="pool"
    )
    store.add_member("pool", "bob", MemberRole.ADMIN)
    return workspace


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("HOUSEHOLD_ENV", "test")
    monkeypatch.setenv("HOUSEHOLD_DATA_DIR", str(tmp_path / "household_data"))
    monkeypatch.setenv("HOUSEHOLD_TIMEZONE", "UTC")
    monkeypatch.delenv("HOUSEHOLD_USER", raising=False)
    monkeypatch.delenv("HOUSEHOLD_TREND_MONTHS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "settlement: Tests for settlement ledger balances")
    config.addinivalue_line("markers", "budget: Tests for budget-vs-actual comparison")
    config.addinivalue_line("markers", "store: Tests for the file-backed workspace store")
