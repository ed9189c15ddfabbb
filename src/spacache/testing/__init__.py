"""Test utilities for spacache applications.

    from spacache.testing import TestClient
"""

from spacache.testing.client import TestClient

__all__ = ["TestClient"]
