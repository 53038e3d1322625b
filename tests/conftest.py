"""Pytest fixtures for edge graph and CDK stack tests."""

import aws_cdk as cdk
import pytest

from edge_infra.config import (
  BlockPublicAccessConfig,
  BucketConfig,
  CacheConfig,
  EdgeConfig,
  KeyBehaviorConfig,
  OriginConfig,
)

CERTIFICATE_ARN = (
  "arn:aws:acm:us-east-1:123456789012:certificate/"
  "b08418e0-443b-408d-9094-ba6e716ede2b"
)


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def edge_config() -> EdgeConfig:
  """Configuration mirroring the production edge stack."""
  return EdgeConfig(
    stack_id="TestEdge",
    certificate_arn=CERTIFICATE_ARN,
    hosted_zone_id="ZDMYNHE4G4KLW",
    zone_name="example.com",
    domain_names=["example.com"],
    region="us-west-1",
    images_bucket=BucketConfig(
      block_public_access=BlockPublicAccessConfig(),
    ),
    redirect_bucket=BucketConfig(
      redirect_host="www.example.com",
      redirect_protocol="https",
    ),
    origin=OriginConfig(
      host_name="example.com.s3-website-us-west-1.amazonaws.com",
      protocol_policy="http-only",
    ),
    cache=CacheConfig(
      query_strings=KeyBehaviorConfig(behavior="allow-list", keys=["nope"]),
    ),
    tags={"Project": "edge-test"},
  )
