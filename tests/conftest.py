"""Shared fixtures for specgraph tests.

The ``sample_*`` fixtures describe one small project used across the
analyzer, CLI and MCP tests:

    plans:       pln-001-bootstrap <- pln-002-auth-flow <- pln-003-dashboard
    components:  lib-001-core <- svc-001-auth <- app-001-web
    test case:   pln-002-auth-flow exercises svc-001-auth
    criteria:    pln-002-auth-flow targets req-001-login/crt-001;
                 req-002-audit is targeted by nothing
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from specgraph.entities import (
    Component,
    ComponentType,
    Criterion,
    Plan,
    Requirement,
    TestCase,
)
from specgraph.graph import Graph
from specgraph.repository import InMemoryRepository
from tests.helpers import SAMPLE_FILES, make_graph, write_spec_files


# ─────────────────────────────────────────────────────────────────────────────
# Engine scenarios
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def linear_chain() -> Graph:
    return make_graph(["A", "B", "C"], [("A", "B"), ("B", "C")])


@pytest.fixture
def two_cycle() -> Graph:
    return make_graph(["A", "B"], [("A", "B"), ("B", "A")])


@pytest.fixture
def diamond() -> Graph:
    return make_graph(
        ["A", "B", "C", "D"],
        [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")],
    )


# ─────────────────────────────────────────────────────────────────────────────
# Sample project
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_requirements() -> list[Requirement]:
    return [
        Requirement(
            number=1,
            slug="login",
            name="User login",
            criteria=[Criterion(id="req-001-login/crt-001", description="Password login")],
        ),
        Requirement(
            number=2,
            slug="audit",
            name="Audit trail",
            criteria=[Criterion(id="req-002-audit/crt-001")],
        ),
    ]


@pytest.fixture
def sample_plans() -> list[Plan]:
    return [
        Plan(number=1, slug="bootstrap", name="Bootstrap"),
        Plan(
            number=2,
            slug="auth-flow",
            name="Auth flow",
            depends_on=["pln-001-bootstrap"],
            criteria_id="req-001-login/crt-001",
            test_cases=[TestCase(id="tc-001", name="login", components=["svc-001-auth"])],
        ),
        Plan(
            number=3,
            slug="dashboard",
            name="Dashboard",
            depends_on=["pln-002-auth-flow"],
        ),
    ]


@pytest.fixture
def sample_components() -> list[Component]:
    return [
        Component(type=ComponentType.LIBRARY, number=1, slug="core", name="Core"),
        Component(
            type=ComponentType.SERVICE,
            number=1,
            slug="auth",
            name="Auth service",
            depends_on=["lib-001-core"],
        ),
        Component(
            type=ComponentType.APP,
            number=1,
            slug="web",
            name="Web app",
            depends_on=["svc-001-auth"],
        ),
    ]


@pytest.fixture
def sample_repository(sample_plans, sample_components, sample_requirements) -> InMemoryRepository:
    return InMemoryRepository(
        plans=sample_plans,
        components=sample_components,
        requirements=sample_requirements,
    )


@pytest.fixture
def cyclic_repository() -> InMemoryRepository:
    """Two plans that depend on each other."""
    return InMemoryRepository(
        plans=[
            Plan(number=1, slug="a", depends_on=["pln-002-b"]),
            Plan(number=2, slug="b", depends_on=["pln-001-a"]),
        ]
    )


# ─────────────────────────────────────────────────────────────────────────────
# Spec directories on disk
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SPECGRAPH_* variables inherited from the outer environment."""
    for name in list(os.environ):
        if name.startswith("SPECGRAPH_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_project(tmp_path, monkeypatch, clean_env) -> Path:
    """A project directory holding the sample spec set; cwd is set to it."""
    write_spec_files(tmp_path, SAMPLE_FILES)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cyclic_project(tmp_path, monkeypatch, clean_env) -> Path:
    """A project whose two plans depend on each other; cwd is set to it."""
    write_spec_files(
        tmp_path,
        {
            "plans/pln-001-a.yml": "depends_on: [pln-002-b]\n",
            "plans/pln-002-b.yml": "depends_on: [pln-001-a]\n",
        },
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
