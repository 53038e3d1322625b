"""Resource graph: nodes, their dependencies, and who owns them.

Nodes are either OWNED (created and updated by this stack) or IMPORTED
(existing resources the stack only references). Imported nodes are leaves
and are never offered for deletion or mutation.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from graphlib import CycleError, TopologicalSorter
from typing import Any

from .exceptions import ConfigurationError, ImportResolutionError

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
  OWNED = "owned"
  IMPORTED = "imported"


@dataclass(frozen=True)
class Node:
  node_id: str
  kind: NodeKind
  value: Any
  depends_on: tuple[str, ...] = ()

  @property
  def imported(self) -> bool:
    return self.kind is NodeKind.IMPORTED


@dataclass(frozen=True)
class ResourceGraph:
  """Immutable graph with nodes in dependency order."""

  nodes: tuple[Node, ...]
  _index: dict[str, Node] = field(init=False, repr=False, compare=False)

  def __post_init__(self) -> None:
    object.__setattr__(self, "_index", {node.node_id: node for node in self.nodes})

  def __iter__(self) -> Iterator[Node]:
    return iter(self.nodes)

  def __len__(self) -> int:
    return len(self.nodes)

  def __contains__(self, node_id: object) -> bool:
    return node_id in self._index

  @property
  def order(self) -> tuple[str, ...]:
    return tuple(node.node_id for node in self.nodes)

  def node(self, node_id: str) -> Node:
    try:
      return self._index[node_id]
    except KeyError:
      raise KeyError(f"No node {node_id!r} in graph") from None

  def value(self, node_id: str) -> Any:
    return self.node(node_id).value

  def dependencies(self, node_id: str) -> tuple[str, ...]:
    return self.node(node_id).depends_on

  def dependents(self, node_id: str) -> tuple[str, ...]:
    """Ids of nodes that directly depend on ``node_id``."""
    self.node(node_id)
    return tuple(node.node_id for node in self.nodes if node_id in node.depends_on)

  def owned(self) -> tuple[Node, ...]:
    return tuple(node for node in self.nodes if node.kind is NodeKind.OWNED)

  def imported(self) -> tuple[Node, ...]:
    return tuple(node for node in self.nodes if node.kind is NodeKind.IMPORTED)

  def deletion_candidates(self) -> tuple[Node, ...]:
    """Nodes a reconciliation may delete, dependents first.

    Imported nodes are never included.
    """
    return tuple(reversed(self.owned()))

  def assert_mutable(self, node_id: str) -> Node:
    """Return the node if this stack may modify it."""
    node = self.node(node_id)
    if node.imported:
      raise ImportResolutionError(f"{node_id} is imported and cannot be modified")
    return node


class GraphBuilder:
  """Accumulates nodes and produces a ResourceGraph.

  Nodes are added explicitly; ``build`` checks every dependency exists and
  sorts the nodes so each appears after everything it depends on.
  """

  def __init__(self) -> None:
    self._nodes: dict[str, Node] = {}

  def __contains__(self, node_id: object) -> bool:
    return node_id in self._nodes

  def _add(self, node: Node) -> Node:
    if not node.node_id:
      raise ConfigurationError("Graph nodes need a non-empty id")
    if node.node_id in self._nodes:
      raise ConfigurationError(f"Duplicate graph node {node.node_id!r}")
    self._nodes[node.node_id] = node
    logger.debug("Registered %s node %s", node.kind.value, node.node_id)
    return node

  def add_owned(self, node_id: str, value: Any, depends_on: Iterable[str] = ()) -> Node:
    return self._add(Node(node_id, NodeKind.OWNED, value, tuple(dict.fromkeys(depends_on))))

  def add_imported(self, node_id: str, value: Any) -> Node:
    return self._add(Node(node_id, NodeKind.IMPORTED, value))

  def build(self) -> ResourceGraph:
    sorter: TopologicalSorter[str] = TopologicalSorter()
    for node in self._nodes.values():
      if node.node_id in node.depends_on:
        raise ConfigurationError(f"Node {node.node_id!r} depends on itself")
      missing = [dep for dep in node.depends_on if dep not in self._nodes]
      if missing:
        raise ConfigurationError(
          f"Node {node.node_id!r} depends on undeclared nodes: {', '.join(missing)}"
        )
      sorter.add(node.node_id, *node.depends_on)

    try:
      order = list(sorter.static_order())
    except CycleError as e:
      cycle = " -> ".join(e.args[1])
      raise ConfigurationError(f"Dependency cycle: {cycle}") from e

    graph = ResourceGraph(tuple(self._nodes[node_id] for node_id in order))
    logger.info("Resource graph order: %s", ", ".join(graph.order))
    return graph
