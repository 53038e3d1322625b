"""HTTP origin wrapping the redirect bucket's website endpoint."""

from .models import Bucket, Origin, OriginProtocolPolicy, coerce_enum

# Older regions serve website endpoints as s3-website-<region>, newer ones
# as s3-website.<region>.
_DASH_WEBSITE_REGIONS = {
  "us-east-1",
  "us-west-1",
  "us-west-2",
  "ap-southeast-1",
  "ap-southeast-2",
  "ap-northeast-1",
  "eu-west-1",
  "sa-east-1",
  "us-gov-west-1",
}


def website_endpoint(bucket_name: str, region: str) -> str:
  """Return the S3 static website hostname for a bucket."""
  separator = "-" if region in _DASH_WEBSITE_REGIONS else "."
  return f"{bucket_name}.s3-website{separator}{region}.amazonaws.com"


def wrap_origin(
  bucket: Bucket,
  host_name: str,
  protocol_policy: OriginProtocolPolicy | str,
) -> Origin:
  return Origin(
    host_name=host_name,
    protocol_policy=coerce_enum(OriginProtocolPolicy, protocol_policy, "origin.protocol_policy"),
    source_node=bucket.node_id,
  )
