"""References to the certificate and hosted zone this stack only imports.

Identifiers are validated locally. Nothing here talks to AWS.
"""

import logging
import re
from collections.abc import Iterable

from botocore.utils import ArnParser, InvalidArnException

from .exceptions import ImportResolutionError
from .models import CertificateRef, HostedZoneRef, unique

logger = logging.getLogger(__name__)

# CloudFront only accepts certificates issued in us-east-1.
CLOUDFRONT_CERTIFICATE_REGION = "us-east-1"

_PARTITIONS = {"aws", "aws-cn", "aws-us-gov"}
_ACCOUNT_RE = re.compile(r"^\d{12}$")
_CERTIFICATE_ID_RE = re.compile(
  r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
)
_HOSTED_ZONE_ID_RE = re.compile(r"^Z[0-9A-Z]{1,31}$")
_LABEL_RE = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")


def is_valid_domain_name(name: str, *, allow_wildcard: bool = False) -> bool:
  """Check a DNS name label by label. Optionally allow a leading ``*.``."""
  if allow_wildcard and name.startswith("*."):
    name = name[2:]
  if not name or len(name) > 253:
    return False
  labels = name.lower().split(".")
  return len(labels) >= 2 and all(_LABEL_RE.match(label) for label in labels)


def import_certificate(
  arn: str,
  *,
  required_region: str = CLOUDFRONT_CERTIFICATE_REGION,
  subject_names: Iterable[str] = (),
) -> CertificateRef:
  """Resolve an ACM certificate ARN to a read-only reference.

  ``subject_names`` lists the names the certificate covers, when known, so
  distribution assembly can check its aliases locally.
  """
  if not isinstance(arn, str):
    raise ImportResolutionError(f"Certificate ARN must be a string, got {arn!r}")
  try:
    parts = ArnParser().parse_arn(arn)
  except InvalidArnException as e:
    raise ImportResolutionError(f"Malformed certificate ARN {arn!r}: {e}") from e

  if not arn.startswith("arn:") or parts["partition"] not in _PARTITIONS:
    raise ImportResolutionError(f"Malformed certificate ARN {arn!r}: bad partition")
  if parts["service"] != "acm":
    raise ImportResolutionError(
      f"Certificate ARN {arn!r} belongs to service {parts['service']!r}, expected 'acm'"
    )
  if not _ACCOUNT_RE.match(parts["account"]):
    raise ImportResolutionError(f"Certificate ARN {arn!r} has an invalid account id")

  resource_type, _, certificate_id = parts["resource"].partition("/")
  if resource_type != "certificate" or not _CERTIFICATE_ID_RE.match(certificate_id):
    raise ImportResolutionError(
      f"Certificate ARN {arn!r} does not name a certificate resource"
    )
  if parts["region"] != required_region:
    raise ImportResolutionError(
      f"Certificate {certificate_id} is in {parts['region'] or 'no region'}, "
      f"CloudFront requires {required_region}"
    )

  names = unique(name.lower().rstrip(".") for name in subject_names)
  for name in names:
    if not is_valid_domain_name(name, allow_wildcard=True):
      raise ImportResolutionError(f"Invalid certificate subject name {name!r}")

  logger.debug("Imported certificate %s from %s", certificate_id, parts["region"])
  return CertificateRef(
    arn=arn,
    account=parts["account"],
    region=parts["region"],
    certificate_id=certificate_id,
    subject_names=names,
  )


def import_hosted_zone(hosted_zone_id: str, zone_name: str) -> HostedZoneRef:
  """Resolve a Route 53 hosted zone id and name to a read-only reference."""
  if not isinstance(hosted_zone_id, str):
    raise ImportResolutionError(f"Hosted zone id must be a string, got {hosted_zone_id!r}")
  if not isinstance(zone_name, str):
    raise ImportResolutionError(f"Hosted zone name must be a string, got {zone_name!r}")
  zone_id = hosted_zone_id.removeprefix("/hostedzone/")
  if not _HOSTED_ZONE_ID_RE.match(zone_id):
    raise ImportResolutionError(f"Malformed hosted zone id {hosted_zone_id!r}")

  name = zone_name.lower().rstrip(".")
  if not is_valid_domain_name(name):
    raise ImportResolutionError(f"Malformed hosted zone name {zone_name!r}")

  logger.debug("Imported hosted zone %s (%s)", zone_id, name)
  return HostedZoneRef(hosted_zone_id=zone_id, zone_name=name)
