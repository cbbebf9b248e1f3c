"""Mock implementations for testing."""

from tests.mocks.models import InMemoryModel, InMemoryRecord

__all__ = [
    "InMemoryModel",
    "InMemoryRecord",
]
