"""Integration tests for fmcsa-register.

Integration tests validate components with external dependencies:
- Real MongoDB connections

Run with: poetry run pytest tests/integration/ -v -s
"""
