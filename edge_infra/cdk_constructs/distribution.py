"""CloudFront distribution in front of the redirect website origin."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from constructs import Construct

from ..models import (
  AllowedMethods,
  CachedMethods,
  Distribution,
  HttpVersion,
  Origin,
  OriginProtocolPolicy,
  PriceClass,
  SecurityPolicyProtocol,
  ViewerProtocolPolicy,
)

ORIGIN_PROTOCOL_POLICIES = {
  OriginProtocolPolicy.HTTP_ONLY: cloudfront.OriginProtocolPolicy.HTTP_ONLY,
  OriginProtocolPolicy.HTTPS_ONLY: cloudfront.OriginProtocolPolicy.HTTPS_ONLY,
  OriginProtocolPolicy.MATCH_VIEWER: cloudfront.OriginProtocolPolicy.MATCH_VIEWER,
}

VIEWER_PROTOCOL_POLICIES = {
  ViewerProtocolPolicy.ALLOW_ALL: cloudfront.ViewerProtocolPolicy.ALLOW_ALL,
  ViewerProtocolPolicy.REDIRECT_TO_HTTPS: cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
  ViewerProtocolPolicy.HTTPS_ONLY: cloudfront.ViewerProtocolPolicy.HTTPS_ONLY,
}

ALLOWED_METHODS = {
  AllowedMethods.GET_HEAD: cloudfront.AllowedMethods.ALLOW_GET_HEAD,
  AllowedMethods.GET_HEAD_OPTIONS: cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
  AllowedMethods.ALL: cloudfront.AllowedMethods.ALLOW_ALL,
}

CACHED_METHODS = {
  CachedMethods.GET_HEAD: cloudfront.CachedMethods.CACHE_GET_HEAD,
  CachedMethods.GET_HEAD_OPTIONS: cloudfront.CachedMethods.CACHE_GET_HEAD_OPTIONS,
}

HTTP_VERSIONS = {
  HttpVersion.HTTP1_1: cloudfront.HttpVersion.HTTP1_1,
  HttpVersion.HTTP2: cloudfront.HttpVersion.HTTP2,
  HttpVersion.HTTP2_AND_3: cloudfront.HttpVersion.HTTP2_AND_3,
  HttpVersion.HTTP3: cloudfront.HttpVersion.HTTP3,
}

PRICE_CLASSES = {
  PriceClass.PRICE_CLASS_100: cloudfront.PriceClass.PRICE_CLASS_100,
  PriceClass.PRICE_CLASS_200: cloudfront.PriceClass.PRICE_CLASS_200,
  PriceClass.PRICE_CLASS_ALL: cloudfront.PriceClass.PRICE_CLASS_ALL,
}

SECURITY_POLICIES = {
  SecurityPolicyProtocol.SSL_V3: cloudfront.SecurityPolicyProtocol.SSL_V3,
  SecurityPolicyProtocol.TLS_V1: cloudfront.SecurityPolicyProtocol.TLS_V1,
  SecurityPolicyProtocol.TLS_V1_2016: cloudfront.SecurityPolicyProtocol.TLS_V1_2016,
  SecurityPolicyProtocol.TLS_V1_1_2016: cloudfront.SecurityPolicyProtocol.TLS_V1_1_2016,
  SecurityPolicyProtocol.TLS_V1_2_2018: cloudfront.SecurityPolicyProtocol.TLS_V1_2_2018,
  SecurityPolicyProtocol.TLS_V1_2_2019: cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019,
  SecurityPolicyProtocol.TLS_V1_2_2021: cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
}


def http_origin(origin: Origin) -> origins.HttpOrigin:
  """HTTP origin for an S3 website endpoint (website endpoints have no TLS)."""
  return origins.HttpOrigin(
    origin.host_name,
    protocol_policy=ORIGIN_PROTOCOL_POLICIES[origin.protocol_policy],
  )


class CloudFrontDistribution(Construct):
  """CloudFront distribution bound to an imported certificate.

  The distribution is retained on stack deletion: replacing it or changing
  its aliases and certificate affects every visitor.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    distribution: Distribution,
    origin: cloudfront.IOrigin,
    certificate: acm.ICertificate,
    cache_policy: cloudfront.ICachePolicy,
    response_headers_policy: cloudfront.IResponseHeadersPolicy,
  ) -> None:
    super().__init__(scope, id)

    behavior = distribution.default_behavior
    self.distribution = cloudfront.Distribution(
      self,
      "Default",
      comment=distribution.comment or None,
      default_root_object=distribution.default_root_object or None,
      enabled=distribution.enabled,
      http_version=HTTP_VERSIONS[distribution.http_version],
      enable_ipv6=distribution.enable_ipv6,
      price_class=PRICE_CLASSES[distribution.price_class],
      domain_names=list(distribution.domain_names),
      certificate=certificate,
      minimum_protocol_version=SECURITY_POLICIES[distribution.minimum_protocol_version],
      default_behavior=cloudfront.BehaviorOptions(
        origin=origin,
        allowed_methods=ALLOWED_METHODS[behavior.allowed_methods],
        cached_methods=CACHED_METHODS[behavior.cached_methods],
        viewer_protocol_policy=VIEWER_PROTOCOL_POLICIES[behavior.viewer_protocol_policy],
        compress=behavior.compress,
        cache_policy=cache_policy,
        response_headers_policy=response_headers_policy,
      ),
    )
    self.distribution.apply_removal_policy(RemovalPolicy.RETAIN)
