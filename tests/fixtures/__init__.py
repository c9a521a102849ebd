"""
Test Fixtures and Utilities

Synthetic expenses, members and workspaces for unit and integration tests.
"""
