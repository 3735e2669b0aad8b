"""
Pytest configuration for the nbsync test suite.

Lives at the repository root so the ``nbsync`` package is importable from a
source checkout without installing it first.
"""
