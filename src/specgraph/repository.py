"""
specgraph.repository - Entity sources for analysis.

The analyzers only need three listing calls. InMemoryRepository serves
pre-built lists (tests, embedding); DirectoryRepository reads a spec
folder laid out as::

    specs/
      plans/pln-001-auth-flow.yml
      components/svc-002-billing.yml
      requirements/req-001-login.yml

Files are read on every listing call, so each analysis request works on
a fresh snapshot. Nothing is ever written back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

import yaml

from specgraph.entities import Component, ComponentType, Plan, Requirement, parse_id
from specgraph.errors import SpecLoadError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SPEC_SUFFIXES = (".yml", ".yaml")


class SpecRepository(Protocol):
    """Anything that can list spec entities."""

    def list_plans(self) -> list[Plan]: ...

    def list_components(self) -> list[Component]: ...

    def list_requirements(self) -> list[Requirement]: ...


@dataclass
class InMemoryRepository:
    """Repository backed by plain lists."""

    plans: list[Plan] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    requirements: list[Requirement] = field(default_factory=list)

    def list_plans(self) -> list[Plan]:
        return list(self.plans)

    def list_components(self) -> list[Component]:
        return list(self.components)

    def list_requirements(self) -> list[Requirement]:
        return list(self.requirements)


def _fill_from_filename(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Default number, slug (and component type) from a canonical filename."""
    parsed = parse_id(path.stem)
    if parsed is None:
        return data
    prefix, number, slug = parsed
    filled = dict(data)
    filled.setdefault("number", number)
    filled.setdefault("slug", slug)
    component_type = ComponentType.from_prefix(prefix)
    if component_type is not None:
        filled.setdefault("type", component_type.value)
    return filled


def load_spec_file(path: Path) -> dict[str, Any]:
    """Read one YAML spec file.

    Raises:
        SpecLoadError: If the file is unreadable, not YAML, or not a mapping
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SpecLoadError(path, f"cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise SpecLoadError(path, f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SpecLoadError(path, "expected a mapping at the top level")
    return _fill_from_filename(data, path)


@dataclass
class DirectoryRepository:
    """
    Read-only repository over a spec directory.

    Attributes:
        root: The spec directory (e.g. ``<project>/specs``)
        plans_dir: Subfolder holding plan files
        components_dir: Subfolder holding component files
        requirements_dir: Subfolder holding requirement files (searched recursively)
    """

    root: Path
    plans_dir: str = "plans"
    components_dir: str = "components"
    requirements_dir: str = "requirements"

    @classmethod
    def from_config(cls, root: Path, specs_config: dict[str, Any]) -> DirectoryRepository:
        """Create a repository from the [specs] config section."""
        return cls(
            root=root,
            plans_dir=specs_config.get("plans_dir", "plans"),
            components_dir=specs_config.get("components_dir", "components"),
            requirements_dir=specs_config.get("requirements_dir", "requirements"),
        )

    def _iter_files(self, subdir: str) -> list[Path]:
        folder = self.root / subdir
        if not folder.is_dir():
            logger.debug("Spec folder %s does not exist", folder)
            return []
        return sorted(p for p in folder.rglob("*") if p.suffix in SPEC_SUFFIXES and p.is_file())

    def _load(self, subdir: str, factory: Callable[[dict[str, Any]], T]) -> list[T]:
        entities: list[T] = []
        for path in self._iter_files(subdir):
            data = load_spec_file(path)
            try:
                entities.append(factory(data))
            except (KeyError, TypeError, ValueError) as e:
                raise SpecLoadError(path, f"invalid entity: {e}") from e
        logger.debug("Loaded %d entities from %s", len(entities), self.root / subdir)
        return entities

    def list_plans(self) -> list[Plan]:
        return self._load(self.plans_dir, Plan.from_dict)

    def list_components(self) -> list[Component]:
        return self._load(self.components_dir, Component.from_dict)

    def list_requirements(self) -> list[Requirement]:
        return self._load(self.requirements_dir, Requirement.from_dict)


__all__ = [
    "DirectoryRepository",
    "InMemoryRepository",
    "SpecRepository",
    "load_spec_file",
]
