"""S3 buckets rendered from Bucket values."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..models import Bucket, BucketEncryption, RedirectProtocol

ENCRYPTION = {
  BucketEncryption.S3_MANAGED: s3.BucketEncryption.S3_MANAGED,
}

REDIRECT_PROTOCOLS = {
  RedirectProtocol.HTTP: s3.RedirectProtocol.HTTP,
  RedirectProtocol.HTTPS: s3.RedirectProtocol.HTTPS,
}


class StorageBucket(Construct):
  """S3 bucket that is retained when the stack is deleted."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: Bucket,
  ) -> None:
    super().__init__(scope, id)

    block_public_access = None
    if bucket.block_public_access is not None:
      block_public_access = s3.BlockPublicAccess(
        block_public_acls=bucket.block_public_access.block_public_acls,
        ignore_public_acls=bucket.block_public_access.ignore_public_acls,
        block_public_policy=bucket.block_public_access.block_public_policy,
        restrict_public_buckets=bucket.block_public_access.restrict_public_buckets,
      )

    website_redirect = None
    if bucket.website_redirect is not None:
      website_redirect = s3.RedirectTarget(
        host_name=bucket.website_redirect.host_name,
        protocol=REDIRECT_PROTOCOLS[bucket.website_redirect.protocol],
      )

    self.bucket = s3.Bucket(
      self,
      "Default",
      bucket_name=bucket.bucket_name,
      versioned=bucket.versioned,
      encryption=ENCRYPTION[bucket.encryption],
      block_public_access=block_public_access,
      website_redirect=website_redirect,
      # Bucket values only ever carry RETAIN
      removal_policy=RemovalPolicy.RETAIN,
    )
