"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at a throwaway in-memory SQLite database.
"""

import os
import sys
from pathlib import Path

# Must be set before app.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""
    from domain.models import Base, engine

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
