"""Assembly of the CloudFront distribution, the root of the resource graph."""

from collections.abc import Iterable

from .exceptions import ConfigurationError
from .identity import is_valid_domain_name
from .models import (
  AllowedMethods,
  CachedMethods,
  CachePolicy,
  CertificateRef,
  DefaultBehavior,
  Distribution,
  HttpVersion,
  Origin,
  PriceClass,
  ResponseHeaderPolicy,
  SecurityPolicyProtocol,
  ViewerProtocolPolicy,
  coerce_enum,
  unique,
)


def covers(subject_name: str, domain_name: str) -> bool:
  """Whether a certificate subject name covers a domain.

  A wildcard matches exactly one label: ``*.example.com`` covers
  ``www.example.com`` but neither ``example.com`` nor ``a.b.example.com``.
  """
  if subject_name == domain_name:
    return True
  if subject_name.startswith("*."):
    head, _, rest = domain_name.partition(".")
    return bool(head) and rest == subject_name[2:]
  return False


def assemble_distribution(
  certificate: CertificateRef,
  domain_names: Iterable[str],
  origin: Origin,
  cache_policy: CachePolicy,
  response_headers_policy: ResponseHeaderPolicy,
  *,
  allowed_methods: AllowedMethods | str = AllowedMethods.GET_HEAD,
  cached_methods: CachedMethods | str = CachedMethods.GET_HEAD,
  viewer_protocol_policy: ViewerProtocolPolicy | str = ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
  compress: bool = True,
  enable_ipv6: bool = True,
  http_version: HttpVersion | str = HttpVersion.HTTP2,
  price_class: PriceClass | str = PriceClass.PRICE_CLASS_ALL,
  minimum_protocol_version: SecurityPolicyProtocol | str = SecurityPolicyProtocol.TLS_V1_2_2021,
  comment: str = "",
  default_root_object: str = "",
  enabled: bool = True,
) -> Distribution:
  """Compose certificate, origin and policies into a distribution.

  The domain set must be non-empty. When the certificate reference lists its
  subject names, every domain must be covered by one of them; otherwise the
  check is left to CloudFront.
  """
  names = unique(name.lower().rstrip(".") for name in domain_names)
  if not names:
    raise ConfigurationError("Distribution needs at least one domain name")
  for name in names:
    if not is_valid_domain_name(name, allow_wildcard=True):
      raise ConfigurationError(f"Invalid distribution domain name {name!r}")

  if certificate.subject_names:
    uncovered = [
      name
      for name in names
      if not any(covers(subject, name) for subject in certificate.subject_names)
    ]
    if uncovered:
      raise ConfigurationError(
        f"Certificate {certificate.certificate_id} does not cover {', '.join(uncovered)}"
      )

  allowed = coerce_enum(AllowedMethods, allowed_methods, "distribution.allowed_methods")
  cached = coerce_enum(CachedMethods, cached_methods, "distribution.cached_methods")
  if cached is CachedMethods.GET_HEAD_OPTIONS and allowed is AllowedMethods.GET_HEAD:
    raise ConfigurationError("Cannot cache OPTIONS responses when OPTIONS is not allowed")

  return Distribution(
    domain_names=names,
    certificate=certificate,
    default_behavior=DefaultBehavior(
      origin=origin,
      cache_policy=cache_policy,
      response_headers_policy=response_headers_policy,
      allowed_methods=allowed,
      cached_methods=cached,
      viewer_protocol_policy=coerce_enum(
        ViewerProtocolPolicy, viewer_protocol_policy, "distribution.viewer_protocol_policy"
      ),
      compress=compress,
    ),
    enable_ipv6=enable_ipv6,
    http_version=coerce_enum(HttpVersion, http_version, "distribution.http_version"),
    price_class=coerce_enum(PriceClass, price_class, "distribution.price_class"),
    minimum_protocol_version=coerce_enum(
      SecurityPolicyProtocol, minimum_protocol_version, "distribution.minimum_protocol_version"
    ),
    comment=comment,
    default_root_object=default_root_object,
    enabled=enabled,
  )
