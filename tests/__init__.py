"""
Test Suite for Household Finances

Test Structure:
- fixtures/: Synthetic data builders
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI workflow tests against a temporary data directory

All test data is synthetic.
"""
