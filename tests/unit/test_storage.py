"""Tests for bucket construction."""

import pytest
from aws_cdk import RemovalPolicy

from edge_infra.exceptions import ConfigurationError
from edge_infra.models import (
  BlockPublicAccess,
  Bucket,
  BucketEncryption,
  BucketMode,
  RedirectProtocol,
  WebsiteRedirect,
)
from edge_infra.storage import IMAGES_BLOCK_PUBLIC_ACCESS, build_bucket


class TestVersionedPrivateBucket:
  """Test the images bucket mode."""

  def test_versioned_and_encrypted(self) -> None:
    """Verify versioning and S3-managed encryption."""
    bucket = build_bucket("images", BucketMode.VERSIONED_PRIVATE)

    assert bucket.versioned is True
    assert bucket.encryption == BucketEncryption.S3_MANAGED
    assert bucket.website_redirect is None
    assert bucket.removal_policy == RemovalPolicy.RETAIN

  def test_default_block_public_access(self) -> None:
    """Verify ACLs are blocked but policies are not."""
    bucket = build_bucket("images", "versioned-private")

    assert bucket.block_public_access == IMAGES_BLOCK_PUBLIC_ACCESS
    assert bucket.block_public_access.block_public_acls is True
    assert bucket.block_public_access.block_public_policy is False

  def test_custom_block_public_access(self) -> None:
    """Verify explicit block public access settings are kept."""
    settings = BlockPublicAccess()
    bucket = build_bucket("images", BucketMode.VERSIONED_PRIVATE, block_public_access=settings)

    assert bucket.block_public_access == settings

  def test_rejects_redirect(self) -> None:
    """Verify a private bucket cannot carry a redirect."""
    with pytest.raises(ConfigurationError):
      build_bucket("images", BucketMode.VERSIONED_PRIVATE, redirect_host="www.example.com")


class TestRedirectWebsiteBucket:
  """Test the redirect website bucket mode."""

  def test_redirect_scenario(self) -> None:
    """Verify the redirect target is kept and versioning is off."""
    bucket = build_bucket(
      "website",
      BucketMode.REDIRECT_WEBSITE,
      redirect_host="www.example.com",
      redirect_protocol=RedirectProtocol.HTTPS,
    )

    assert bucket.website_redirect == WebsiteRedirect(
      host_name="www.example.com",
      protocol=RedirectProtocol.HTTPS,
    )
    assert bucket.versioned is False
    assert bucket.removal_policy == RemovalPolicy.RETAIN

  def test_protocol_from_string(self) -> None:
    """Verify protocol strings are converted."""
    bucket = build_bucket(
      "website",
      "redirect-website",
      redirect_host="www.example.com",
      redirect_protocol="http",
    )

    assert bucket.website_redirect.protocol is RedirectProtocol.HTTP

  def test_missing_host(self) -> None:
    """Verify the redirect host is mandatory."""
    with pytest.raises(ConfigurationError, match="redirect host"):
      build_bucket("website", BucketMode.REDIRECT_WEBSITE, redirect_protocol="https")

  def test_missing_protocol(self) -> None:
    """Verify the redirect protocol is mandatory."""
    with pytest.raises(ConfigurationError, match="redirect protocol"):
      build_bucket("website", BucketMode.REDIRECT_WEBSITE, redirect_host="www.example.com")

  def test_invalid_protocol(self) -> None:
    """Verify unknown protocols are rejected."""
    with pytest.raises(ConfigurationError):
      build_bucket(
        "website",
        BucketMode.REDIRECT_WEBSITE,
        redirect_host="www.example.com",
        redirect_protocol="ftp",
      )


class TestRetention:
  """Test that buckets can never be destroyed with the stack."""

  def test_unknown_mode(self) -> None:
    """Verify unknown modes are rejected."""
    with pytest.raises(ConfigurationError):
      build_bucket("images", "public-website")

  @pytest.mark.parametrize("policy", [RemovalPolicy.DESTROY, RemovalPolicy.SNAPSHOT])
  def test_rejects_destructive_policy(self, policy: RemovalPolicy) -> None:
    """Verify Bucket values refuse anything but RETAIN."""
    with pytest.raises(ConfigurationError, match="retain"):
      Bucket(
        node_id="images",
        mode=BucketMode.VERSIONED_PRIVATE,
        versioned=True,
        removal_policy=policy,
      )
