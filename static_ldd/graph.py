"""Directed "depends on" graph keyed by library name."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LibraryRecord:
    name: str
    path: str = ""

    @property
    def resolved(self) -> bool:
        return bool(self.path)


class DependencyGraph:
    """One node per library name, edges kept in insertion order.

    The first node added becomes the root. Re-adding a name keeps the
    record that was written first.
    """

    def __init__(self):
        self._nodes: dict[str, LibraryRecord] = {}
        self._edges: dict[str, list[str]] = {}
        self.root: str | None = None

    def __contains__(self, name):
        return name in self._nodes

    def __len__(self):
        return len(self._nodes)

    def __getitem__(self, name) -> LibraryRecord:
        return self._nodes[name]

    def add_node(self, record: LibraryRecord) -> LibraryRecord:
        existing = self._nodes.get(record.name)
        if existing is not None:
            return existing
        self._nodes[record.name] = record
        self._edges[record.name] = []
        if self.root is None:
            self.root = record.name
        return record

    def add_edge(self, src: str, dst: str) -> None:
        if src not in self._nodes or dst not in self._nodes:
            raise KeyError(f"edge {src} -> {dst} references an unknown node")
        children = self._edges[src]
        if dst not in children:
            children.append(dst)

    def nodes(self) -> list[LibraryRecord]:
        return list(self._nodes.values())

    def children(self, name: str) -> list[str]:
        return list(self._edges[name])

    def edges(self) -> list[tuple[str, str]]:
        return [(src, dst) for src, dsts in self._edges.items() for dst in dsts]

    def walk_depth_first(self, visit, start=None):
        """Call ``visit(record, depth)`` once per traversal step.

        A node reachable over several edges is visited once per edge. A
        child already on the current walk path is skipped so cycles end.
        """
        start = self.root if start is None else start
        if start is None:
            return

        def _walk(name, depth, path):
            visit(self._nodes[name], depth)
            path.add(name)
            for child in self._edges[name]:
                if child not in path:
                    _walk(child, depth + 1, path)
            path.discard(name)

        _walk(start, 0, set())

    def dependencies(self) -> dict[str, str]:
        """Deduplicated ``{name: path}`` in depth-first order, root included."""
        deps = {}

        def _collect(record, depth):
            deps.setdefault(record.name, record.path)

        self.walk_depth_first(_collect)
        return deps
