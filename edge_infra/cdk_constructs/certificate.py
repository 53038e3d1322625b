"""Existing ACM certificate referenced by ARN."""

from aws_cdk import aws_certificatemanager as acm
from constructs import Construct

from ..models import CertificateRef


class ImportedCertificate(Construct):
  """Read-only reference to a certificate in us-east-1 (required by CloudFront)."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    certificate: CertificateRef,
  ) -> None:
    super().__init__(scope, id)

    self.certificate = acm.Certificate.from_certificate_arn(
      self,
      "Default",
      certificate.arn,
    )
