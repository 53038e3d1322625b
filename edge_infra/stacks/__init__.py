"""CDK stacks for the edge infrastructure."""

from .edge_stack import EdgeStack

__all__ = ["EdgeStack"]
