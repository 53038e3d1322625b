"""Existing Route 53 hosted zone."""

from aws_cdk import aws_route53 as route53
from constructs import Construct

from ..models import HostedZoneRef


class ImportedHostedZone(Construct):
  """Read-only reference to a hosted zone. No records are managed here."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    hosted_zone: HostedZoneRef,
  ) -> None:
    super().__init__(scope, id)

    self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
      self,
      "Default",
      hosted_zone_id=hosted_zone.hosted_zone_id,
      zone_name=hosted_zone.zone_name,
    )
