"""Shared pytest fixtures."""

from typing import Any

import pytest


@pytest.fixture
def sample_message() -> dict[str, Any]:
    """A searcharchives record as groups.io returns it, extra fields included."""
    return {
        "id": 1001,
        "object": "message",
        "group_id": 36599,
        "subject": "Westerbeke 30 raw water impeller",
        "from": "skipper@example.com",
        "date": "2023-06-01T10:00:00Z",
        "body": "The impeller failed after 200 hours. Replaced with the Jabsco kit.",
        "is_reply": False,
    }
