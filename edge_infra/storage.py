"""Bucket values for the images bucket and the redirect website bucket."""

from .exceptions import ConfigurationError
from .models import (
  BlockPublicAccess,
  Bucket,
  BucketEncryption,
  BucketMode,
  RedirectProtocol,
  WebsiteRedirect,
  coerce_enum,
)

# Public ACLs are blocked, bucket policies may still grant public reads.
IMAGES_BLOCK_PUBLIC_ACCESS = BlockPublicAccess(
  block_public_acls=True,
  ignore_public_acls=True,
  block_public_policy=False,
  restrict_public_buckets=False,
)


def build_bucket(
  node_id: str,
  mode: BucketMode | str,
  *,
  bucket_name: str | None = None,
  redirect_host: str | None = None,
  redirect_protocol: RedirectProtocol | str | None = None,
  block_public_access: BlockPublicAccess | None = None,
) -> Bucket:
  """Build a retained, S3-managed-encrypted bucket for the given mode.

  ``versioned-private`` buckets are versioned and must not carry a redirect.
  ``redirect-website`` buckets require both ``redirect_host`` and
  ``redirect_protocol`` and are not versioned.
  """
  mode = coerce_enum(BucketMode, mode, f"{node_id}.mode")

  if mode is BucketMode.REDIRECT_WEBSITE:
    if not redirect_host:
      raise ConfigurationError(f"{node_id}: redirect website bucket needs a redirect host")
    if redirect_protocol is None:
      raise ConfigurationError(
        f"{node_id}: redirect website bucket needs a redirect protocol"
      )
    return Bucket(
      node_id=node_id,
      mode=mode,
      versioned=False,
      encryption=BucketEncryption.S3_MANAGED,
      bucket_name=bucket_name,
      block_public_access=block_public_access,
      website_redirect=WebsiteRedirect(
        host_name=redirect_host,
        protocol=coerce_enum(RedirectProtocol, redirect_protocol, f"{node_id}.redirect_protocol"),
      ),
    )

  if redirect_host or redirect_protocol is not None:
    raise ConfigurationError(f"{node_id}: versioned private bucket cannot redirect")
  return Bucket(
    node_id=node_id,
    mode=mode,
    versioned=True,
    encryption=BucketEncryption.S3_MANAGED,
    bucket_name=bucket_name,
    block_public_access=block_public_access or IMAGES_BLOCK_PUBLIC_ACCESS,
  )
