from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from school_records.main import create_app


@pytest.fixture
def client():
    """TestClient over a fresh app, so every test starts with empty stores."""
    return TestClient(create_app())
