"""Internal project dependency graph.

Builds a directed graph of project -> project references and counts, for
every project, how often a depth-first walk from the entry points lands on
it. The count is incremented on every edge arrival, not once per node, so
a project shared by several consumers (or reached along several paths)
scores higher. That over-count is the "popularity" signal the report shows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import networkx as nx

from .manifests import UNKNOWN_FRAMEWORK, ProjectDeclaration


@dataclass(frozen=True)
class ProjectNode:
    """One discovered project. Names compare case-insensitively."""

    name: str
    target_framework: str = UNKNOWN_FRAMEWORK
    references: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return self.name.casefold()


@dataclass(frozen=True)
class ProjectUsage:
    """A project with its usage count, as presented in the report."""

    name: str
    reference_count: int
    target_framework: str = UNKNOWN_FRAMEWORK

    @property
    def is_top_level(self) -> bool:
        return self.reference_count == 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "reference_count": self.reference_count,
            "target_framework": self.target_framework,
            "top_level": self.is_top_level,
        }


class DependencyGraph:
    """Project reference graph keyed by case-folded project name.

    Backed by a ``networkx.DiGraph``. Each node carries the project's display
    ``name``, its ``target_framework`` and the ordered ``references`` tuple as
    read from the manifest. Edges exist only between known projects.
    """

    def __init__(self, nodes: Iterable[ProjectNode] = ()):
        G = nx.DiGraph()

        for node in nodes:
            if node.key not in G:
                G.add_node(
                    node.key,
                    name=node.name,
                    target_framework=node.target_framework,
                    references=node.references,
                )

        for key, references in list(G.nodes(data="references")):
            for ref in references:
                if ref.casefold() in G:
                    G.add_edge(key, ref.casefold())

        self._graph = G

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._graph

    def __getitem__(self, name: str) -> ProjectNode:
        return self._node(name.casefold())

    def _node(self, key: str) -> ProjectNode:
        attrs = self._graph.nodes[key]
        return ProjectNode(attrs["name"], attrs["target_framework"], attrs["references"])

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    @property
    def nodes(self) -> list[ProjectNode]:
        return [self._node(key) for key in self._graph]

    @property
    def names(self) -> list[str]:
        return [name for _, name in self._graph.nodes(data="name")]

    def references_of(self, name: str) -> list[str]:
        """Known references of a project as keys, in manifest order.

        Repeated ``ProjectReference`` entries are kept, so each one is a
        separate arrival during traversal.
        """
        key = name.casefold()
        if key not in self._graph:
            return []
        return [
            ref.casefold()
            for ref in self._graph.nodes[key]["references"]
            if self._graph.has_edge(key, ref.casefold())
        ]

    @property
    def referenced_by(self) -> set[str]:
        """Case-folded names that appear in any project's reference list."""
        return {ref.casefold() for _, refs in self._graph.nodes(data="references") for ref in refs}

    @property
    def roots(self) -> list[str]:
        """Entry points: projects nobody references.

        When every project is referenced (a cycle spanning all of them),
        every project is treated as a root so traversal still happens.
        """
        referenced = self.referenced_by
        roots = [name for key, name in self._graph.nodes(data="name") if key not in referenced]
        return roots or self.names

    @property
    def leaves(self) -> list[str]:
        """Projects with no reference to another known project."""
        return [name for key, name in self._graph.nodes(data="name") if self._graph.out_degree(key) == 0]

    def usage_counts(self) -> dict[str, int]:
        """Edge-arrival counts for every project, from a DFS rooted at each entry point.

        An edge back to a node already on the current path is skipped, which
        breaks cycles. Off-path nodes are counted and re-entered on every
        arrival, even when a different path from the same root got there first.
        """
        counts = {key: 0 for key in self._graph}

        for root in self.roots:
            root_key = root.casefold()
            path = {root_key}
            # Explicit stack of (node key, iterator over its known references)
            stack = [(root_key, iter(self.references_of(root_key)))]

            while stack:
                key, deps = stack[-1]
                dep = next(deps, None)
                if dep is None:
                    stack.pop()
                    if stack:
                        path.discard(key)
                    continue

                if dep in path:
                    continue
                counts[dep] += 1
                path.add(dep)
                stack.append((dep, iter(self.references_of(dep))))

        return {self._graph.nodes[key]["name"]: count for key, count in counts.items()}

    def ranked(self, counts: dict[str, int] | None = None) -> list[ProjectUsage]:
        """Projects sorted by usage count (descending), then name (case-insensitive)."""
        counts = self.usage_counts() if counts is None else counts
        usages = [
            ProjectUsage(
                name=attrs["name"],
                reference_count=counts.get(attrs["name"], 0),
                target_framework=attrs["target_framework"],
            )
            for _, attrs in self._graph.nodes(data=True)
        ]
        return sorted(usages, key=lambda u: (-u.reference_count, u.name.casefold()))


def build_graph(declarations: Iterable[ProjectDeclaration]) -> DependencyGraph:
    """Create the graph from manifest declarations.

    Declarations sharing a file name collapse into one node: their
    references are concatenated and the first known framework wins.
    """
    merged: dict[str, dict] = {}
    for decl in declarations:
        entry = merged.setdefault(
            decl.name.casefold(),
            {"name": decl.name, "target_framework": UNKNOWN_FRAMEWORK, "references": []},
        )
        if entry["target_framework"] == UNKNOWN_FRAMEWORK:
            entry["target_framework"] = decl.target_framework or UNKNOWN_FRAMEWORK
        entry["references"].extend(decl.references)

    return DependencyGraph(
        ProjectNode(
            name=entry["name"],
            target_framework=entry["target_framework"],
            references=tuple(entry["references"]),
        )
        for entry in merged.values()
    )


def project_usages(declarations: Iterable[ProjectDeclaration]) -> list[ProjectUsage]:
    """Build the graph and return the ranked project list in one step."""
    return build_graph(declarations).ranked()
