"""
specgraph.entities - Spec document models.

Provides dataclasses for the entity kinds that take part in dependency
analysis. Each entity computes its canonical ID from a type prefix, a
zero-padded sequence number and a slug (e.g. ``pln-001-auth-flow``).
The graph engine only ever sees that ID and the entity's references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ID_PATTERN = re.compile(r"^(?P<prefix>[a-z]+)-(?P<number>\d+)-(?P<slug>[a-z0-9][a-z0-9-]*)$")


def make_id(prefix: str, number: int, slug: str) -> str:
    """Build a canonical ID such as ``svc-007-billing``."""
    return f"{prefix}-{number:03d}-{slug}"


def parse_id(entity_id: str) -> tuple[str, int, str] | None:
    """Split a canonical ID into (prefix, number, slug).

    Returns:
        The components, or None if the ID is not canonical.
    """
    match = ID_PATTERN.match(entity_id)
    if not match:
        return None
    return match["prefix"], int(match["number"]), match["slug"]


class EntityKind(Enum):
    """Kinds of spec document, with their ID prefix."""

    REQUIREMENT = "req"
    PLAN = "pln"
    COMPONENT = "cmp"

    @property
    def prefix(self) -> str:
        return self.value


class ComponentType(Enum):
    """Component flavours. Each one carries its own ID prefix."""

    APP = "app"
    SERVICE = "service"
    LIBRARY = "library"
    TOOL = "tool"

    @property
    def prefix(self) -> str:
        return _COMPONENT_PREFIXES[self]

    @classmethod
    def from_prefix(cls, prefix: str) -> ComponentType | None:
        for member, value in _COMPONENT_PREFIXES.items():
            if value == prefix:
                return member
        return None


_COMPONENT_PREFIXES = {
    ComponentType.APP: "app",
    ComponentType.SERVICE: "svc",
    ComponentType.LIBRARY: "lib",
    ComponentType.TOOL: "tol",
}


def _str_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class Criterion:
    """An acceptance criterion of a requirement (e.g. ``req-001-login/crt-001``)."""

    id: str
    description: str = ""


@dataclass
class Requirement:
    """
    A business or technical requirement.

    Attributes:
        number: Sequence number within the requirement folder
        slug: URL-safe short name
        name: Human-readable title
        criteria: Acceptance criteria that plans can target
    """

    number: int
    slug: str
    name: str = ""
    criteria: list[Criterion] = field(default_factory=list)

    @property
    def id(self) -> str:
        return make_id(EntityKind.REQUIREMENT.prefix, self.number, self.slug)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Requirement:
        criteria = []
        for item in data.get("criteria") or []:
            if isinstance(item, dict):
                criteria.append(
                    Criterion(id=str(item.get("id", "")), description=item.get("description", ""))
                )
            else:
                criteria.append(Criterion(id=str(item)))
        return cls(
            number=int(data["number"]),
            slug=str(data["slug"]),
            name=data.get("name", ""),
            criteria=criteria,
        )


@dataclass
class TestCase:
    """A plan test case and the components it exercises."""

    __test__ = False  # not a pytest class

    id: str = ""
    name: str = ""
    components: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestCase:
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            components=_str_list(data.get("components")),
        )


@dataclass
class Plan:
    """
    An implementation plan.

    Attributes:
        number: Sequence number
        slug: URL-safe short name
        name: Human-readable title
        depends_on: IDs of plans that must be completed first
        criteria_id: Requirement criterion this plan fulfils, if any
        test_cases: Test cases; their component lists link plans to components
    """

    number: int
    slug: str
    name: str = ""
    depends_on: list[str] = field(default_factory=list)
    criteria_id: str | None = None
    test_cases: list[TestCase] = field(default_factory=list)

    @property
    def id(self) -> str:
        return make_id(EntityKind.PLAN.prefix, self.number, self.slug)

    def component_references(self) -> list[str]:
        """All component IDs referenced by this plan's test cases, in order."""
        return [cid for tc in self.test_cases for cid in tc.components]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Plan:
        return cls(
            number=int(data["number"]),
            slug=str(data["slug"]),
            name=data.get("name", ""),
            depends_on=_str_list(data.get("depends_on")),
            criteria_id=data.get("criteria_id") or None,
            test_cases=[TestCase.from_dict(tc) for tc in data.get("test_cases") or []],
        )


@dataclass
class Component:
    """
    A deployable or reusable unit (app, service, library, tool).

    Attributes:
        type: Component flavour; decides the ID prefix
        number: Sequence number
        slug: URL-safe short name
        name: Human-readable title
        depends_on: IDs of components this one depends on
    """

    type: ComponentType
    number: int
    slug: str
    name: str = ""
    depends_on: list[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return make_id(self.type.prefix, self.number, self.slug)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Component:
        return cls(
            type=ComponentType(data.get("type", ComponentType.LIBRARY.value)),
            number=int(data["number"]),
            slug=str(data["slug"]),
            name=data.get("name", ""),
            depends_on=_str_list(data.get("depends_on")),
        )


__all__ = [
    "Component",
    "ComponentType",
    "Criterion",
    "EntityKind",
    "Plan",
    "Requirement",
    "TestCase",
    "make_id",
    "parse_id",
]
