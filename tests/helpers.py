"""Test helpers: graph construction and on-disk spec directories."""

from __future__ import annotations

from pathlib import Path

from specgraph.graph import Edge, Graph


def make_graph(nodes: list[str], edges: list[tuple[str, str]]) -> Graph:
    """Build a Graph from node IDs and (source, target) pairs."""
    return Graph(nodes=list(nodes), edges=[Edge(a, b) for a, b in edges])


def write_spec_files(root: Path, files: dict[str, str]) -> Path:
    """Write files under root/specs and return the spec directory."""
    spec_dir = root / "specs"
    for rel, content in files.items():
        path = spec_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return spec_dir


SAMPLE_FILES = {
    "plans/pln-001-bootstrap.yml": "name: Bootstrap\n",
    "plans/pln-002-auth-flow.yml": """\
name: Auth flow
depends_on:
  - pln-001-bootstrap
criteria_id: req-001-login/crt-001
test_cases:
  - id: tc-001
    name: login
    components: [svc-001-auth]
""",
    "plans/pln-003-dashboard.yml": """\
name: Dashboard
depends_on: [pln-002-auth-flow]
""",
    "components/lib-001-core.yml": "name: Core\n",
    "components/svc-001-auth.yml": """\
name: Auth service
depends_on: [lib-001-core]
""",
    "components/app-001-web.yml": """\
name: Web app
depends_on: [svc-001-auth]
""",
    "requirements/req-001-login.yml": """\
name: User login
criteria:
  - id: req-001-login/crt-001
    description: Password login
""",
    "requirements/req-002-audit.yml": """\
name: Audit trail
criteria:
  - id: req-002-audit/crt-001
""",
}
