#!/usr/bin/env python3
"""CDK application entry point for the edge infrastructure."""

import logging
import os
from pathlib import Path

import aws_cdk as cdk

from edge_infra.config import Config
from edge_infra.stacks import EdgeStack
from edge_infra.topology import build_topology

logger = logging.getLogger(__name__)


def main() -> None:
  """Build the resource graph for each configured stack and synthesize it."""
  logging.basicConfig(
    level=os.environ.get("EDGE_INFRA_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
  )

  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "edge.yaml"
  config = Config.from_yaml(Path(config_path))

  for edge in config.stacks:
    # Configuration and import errors propagate so synth fails before deploy
    graph = build_topology(edge)
    EdgeStack(
      app,
      edge.stack_id,
      graph=graph,
      tags=edge.tags,
      construct_ids=edge.construct_ids,
      env=cdk.Environment(
        account=edge.account or os.environ.get("CDK_DEFAULT_ACCOUNT"),
        region=edge.region,
      ),
      description=edge.description or None,
    )
    logger.info("Synthesizing %s with %d resources", edge.stack_id, len(graph))

  app.synth()


if __name__ == "__main__":
  main()
