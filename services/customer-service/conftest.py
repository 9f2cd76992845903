"""
Pytest configuration for customer-service tests
"""

import os

# Keep the import-time application off the network
os.environ.setdefault("STORE_BACKEND", "memory")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )
