"""CDK stack rendered from an edge resource graph."""

import logging
from typing import Any

import aws_cdk as cdk
from constructs import Construct

from ..cdk_constructs import (
  CloudFrontDistribution,
  CorsResponseHeadersPolicy,
  EdgeCachePolicy,
  ImportedCertificate,
  ImportedHostedZone,
  StorageBucket,
  http_origin,
)
from ..exceptions import ConfigurationError
from ..graph import Node, ResourceGraph
from ..models import (
  Bucket,
  CachePolicy,
  CertificateRef,
  Distribution,
  HostedZoneRef,
  Origin,
  ResponseHeaderPolicy,
)

logger = logging.getLogger(__name__)


def construct_id(node_id: str) -> str:
  """``images-bucket`` -> ``ImagesBucket``. Stable ids keep logical ids stable."""
  return "".join(part.capitalize() for part in node_id.replace("_", "-").split("-"))


def resolve_construct_ids(graph: ResourceGraph, overrides: dict[str, str]) -> dict[str, str]:
  """Construct id per node: the override when given, else derived from the node id.

  Overrides pin resources to the ids of an already deployed stack so it is
  updated in place instead of replaced.
  """
  unknown = sorted(set(overrides) - {node.node_id for node in graph})
  if unknown:
    raise ConfigurationError(f"construct_ids names unknown nodes: {', '.join(unknown)}")

  ids = {
    node.node_id: overrides.get(node.node_id) or construct_id(node.node_id) for node in graph
  }
  seen: dict[str, str] = {}
  for node_id, cid in ids.items():
    if cid in seen:
      raise ConfigurationError(
        f"Nodes {seen[cid]} and {node_id} share the construct id {cid!r}"
      )
    seen[cid] = node_id
  return ids


class EdgeStack(cdk.Stack):
  """Stack for the static-asset and CDN tier.

  Nodes are rendered in graph order, so every construct exists before
  anything that references it.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    graph: ResourceGraph,
    tags: dict[str, str] | None = None,
    construct_ids: dict[str, str] | None = None,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.graph = graph
    self.construct_ids = resolve_construct_ids(graph, construct_ids or {})
    self.resources: dict[str, Any] = {}
    for node in graph:
      self.resources[node.node_id] = self._render(node)
      logger.debug("Rendered %s as %s", node.node_id, self.construct_ids[node.node_id])

    for key, value in (tags or {}).items():
      cdk.Tags.of(self).add(key, value)

  def _dependency(self, node: Node, value_type: type) -> Any:
    for dep in node.depends_on:
      if isinstance(self.graph.value(dep), value_type):
        return self.resources[dep]
    raise KeyError(f"{node.node_id} has no {value_type.__name__} dependency")

  def _render(self, node: Node) -> Any:
    value = node.value
    cid = self.construct_ids[node.node_id]

    if isinstance(value, Bucket):
      storage = StorageBucket(self, cid, bucket=value)
      cdk.CfnOutput(
        self,
        f"{cid}Name",
        value=storage.bucket.bucket_name,
        description=f"S3 bucket name ({value.mode.value})",
      )
      return storage

    if isinstance(value, CertificateRef):
      return ImportedCertificate(self, cid, certificate=value)

    if isinstance(value, HostedZoneRef):
      zone = ImportedHostedZone(self, cid, hosted_zone=value)
      cdk.CfnOutput(
        self,
        "HostedZoneId",
        value=zone.hosted_zone.hosted_zone_id,
        description="Route 53 hosted zone ID",
      )
      return zone

    if isinstance(value, ResponseHeaderPolicy):
      return CorsResponseHeadersPolicy(self, cid, policy=value)

    if isinstance(value, CachePolicy):
      return EdgeCachePolicy(self, cid, policy=value)

    if isinstance(value, Origin):
      return http_origin(value)

    if isinstance(value, Distribution):
      return self._render_distribution(node, cid, value)

    raise TypeError(f"Cannot render node {node.node_id} of type {type(value).__name__}")

  def _render_distribution(self, node: Node, cid: str, value: Distribution) -> CloudFrontDistribution:
    distribution = CloudFrontDistribution(
      self,
      cid,
      distribution=value,
      origin=self._dependency(node, Origin),
      certificate=self._dependency(node, CertificateRef).certificate,
      cache_policy=self._dependency(node, CachePolicy).policy,
      response_headers_policy=self._dependency(node, ResponseHeaderPolicy).policy,
    )

    cdk.CfnOutput(
      self,
      "DistributionId",
      value=distribution.distribution.distribution_id,
      description="CloudFront distribution ID",
    )

    cdk.CfnOutput(
      self,
      "DistributionDomainName",
      value=distribution.distribution.distribution_domain_name,
      description="CloudFront distribution domain name",
    )
    return distribution
