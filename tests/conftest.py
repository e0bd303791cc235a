"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from retarget.core.registry import TargetRegistry
from retarget.mapping.driver import DictMappingDriver
from retarget.mapping.factory import Session
from retarget.resolution.listener import ResolveTargetListener


@pytest.fixture
def registry() -> TargetRegistry:
    """Empty target registry."""
    return TargetRegistry()


@pytest.fixture
def make_session():
    """Helper to build a Session over a DictMappingDriver.

    Usage:
        session = make_session({"app.entities.Owner": {"identifier": ["id"], ...}})
        session = make_session(declarations, listener=ResolveTargetListener(registry))
    """

    def _make(
        declarations: dict[str, dict[str, Any]],
        listener: ResolveTargetListener | None = None,
    ) -> Session:
        session = Session.create(DictMappingDriver(declarations))
        if listener is not None:
            listener.subscribe(session.event_manager)
        return session

    return _make


@pytest.fixture
def composite_owner() -> dict[str, Any]:
    """Declaration of a type keyed by two scalar columns."""
    return {
        "identifier": ["id1", "id2"],
        "fields": {"id1": None, "id2": None, "name": None},
    }


@pytest.fixture
def simple_owner() -> dict[str, Any]:
    """Declaration of a type keyed by a single column."""
    return {"identifier": ["id"], "fields": {"id": None, "name": None}}
