"""Unit test fixtures — registry factory and latency metric cleanup."""

from __future__ import annotations

import pytest

from holonmem.observability import reset_latency_metrics
from holonmem.semantic import IndividualModelRegistry


@pytest.fixture()
def registry() -> IndividualModelRegistry:
    """Return an empty registry."""
    return IndividualModelRegistry()


@pytest.fixture(autouse=True)
def clean_latency_metrics():
    """Reset in-process latency aggregates between tests."""
    reset_latency_metrics()
    yield
    reset_latency_metrics()
