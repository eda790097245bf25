"""
Pytest configuration and shared fixtures for culture-kernel tests.
"""
import json
import os
import tempfile
from typing import Any, Dict

import pytest

from culture_kernel.kernel.schema import Ritual


def _ritual_data(ritual_id: str, **overrides: Any) -> Dict[str, Any]:
    """A complete, valid ritual payload with predictable field values."""
    data = {
        "id": ritual_id,
        "name": f"Ritual {ritual_id}",
        "origin_culture": "Test Culture",
        "category": "testing",
        "bug_fixed": f"Bug fixed by {ritual_id}",
        "mechanism": "Repetition",
        "modern_script": {"trigger": "On demand", "timing": "Daily", "rules": "Be kind"},
        "ethical_guardrails": ["Consent first", "No coercion"],
    }
    data.update(overrides)
    return data


def _make_ritual(ritual_id: str, **overrides: Any) -> Ritual:
    return Ritual.model_validate(_ritual_data(ritual_id, **overrides))


@pytest.fixture
def temp_db():
    """Create a temporary database file for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    yield db_path

    # Cleanup
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def rituals_file(tmp_path):
    """A definition source holding three rituals."""
    path = tmp_path / "rituals.json"
    path.write_text(json.dumps([_ritual_data(rid) for rid in ("alpha", "beta", "gamma")]))
    return path


@pytest.fixture
def ritual_data():
    """Factory for raw ritual dicts: ritual_data("id", name="...")."""
    return _ritual_data


@pytest.fixture
def make_ritual():
    """Factory for validated Ritual models."""
    return _make_ritual
