"""Tests for origin wrapping."""

import pytest

from edge_infra.exceptions import ConfigurationError
from edge_infra.models import BucketMode, OriginProtocolPolicy
from edge_infra.origin import website_endpoint, wrap_origin
from edge_infra.storage import build_bucket


@pytest.fixture
def bucket():
  return build_bucket(
    "redirect-bucket",
    BucketMode.REDIRECT_WEBSITE,
    redirect_host="www.example.com",
    redirect_protocol="https",
  )


def test_wrap_origin(bucket) -> None:
  """Verify the origin records host, policy and source bucket."""
  origin = wrap_origin(bucket, "example.com.s3-website-us-west-1.amazonaws.com", "http-only")

  assert origin.host_name == "example.com.s3-website-us-west-1.amazonaws.com"
  assert origin.protocol_policy is OriginProtocolPolicy.HTTP_ONLY
  assert origin.source_node == "redirect-bucket"


def test_wrap_origin_rejects_unknown_policy(bucket) -> None:
  """Verify protocol policies must be known values."""
  with pytest.raises(ConfigurationError):
    wrap_origin(bucket, "example.com", "tls-only")


@pytest.mark.parametrize(
  ("region", "expected"),
  [
    ("us-west-1", "example.com.s3-website-us-west-1.amazonaws.com"),
    ("eu-central-1", "example.com.s3-website.eu-central-1.amazonaws.com"),
  ],
)
def test_website_endpoint(region: str, expected: str) -> None:
  """Verify dash and dot website endpoint formats."""
  assert website_endpoint("example.com", region) == expected
