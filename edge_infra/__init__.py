"""Static-asset and CDN edge infrastructure."""

from .exceptions import ConfigurationError, EdgeInfraError, ImportResolutionError
from .graph import GraphBuilder, Node, NodeKind, ResourceGraph
from .topology import build_topology

__all__ = [
  "ConfigurationError",
  "EdgeInfraError",
  "GraphBuilder",
  "ImportResolutionError",
  "Node",
  "NodeKind",
  "ResourceGraph",
  "build_topology",
]
