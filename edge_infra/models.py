"""Value types for the nodes of the edge resource graph.

Every value is a frozen dataclass so a graph built twice from the same
configuration compares equal node for node.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from aws_cdk import RemovalPolicy

from .exceptions import ConfigurationError

E = TypeVar("E", bound=Enum)


class BucketMode(str, Enum):
  VERSIONED_PRIVATE = "versioned-private"
  REDIRECT_WEBSITE = "redirect-website"


class BucketEncryption(str, Enum):
  S3_MANAGED = "s3-managed"


class RedirectProtocol(str, Enum):
  HTTP = "http"
  HTTPS = "https"


class BehaviorKind(str, Enum):
  """How a cookie, header or query string participates in the cache key."""

  NONE = "none"
  ALLOW_LIST = "allow-list"
  DENY_LIST = "deny-list"
  ALL = "all"


class OriginProtocolPolicy(str, Enum):
  HTTP_ONLY = "http-only"
  HTTPS_ONLY = "https-only"
  MATCH_VIEWER = "match-viewer"


class ViewerProtocolPolicy(str, Enum):
  ALLOW_ALL = "allow-all"
  REDIRECT_TO_HTTPS = "redirect-to-https"
  HTTPS_ONLY = "https-only"


class AllowedMethods(str, Enum):
  GET_HEAD = "GET_HEAD"
  GET_HEAD_OPTIONS = "GET_HEAD_OPTIONS"
  ALL = "ALL"


class CachedMethods(str, Enum):
  GET_HEAD = "GET_HEAD"
  GET_HEAD_OPTIONS = "GET_HEAD_OPTIONS"


class HttpVersion(str, Enum):
  HTTP1_1 = "http1.1"
  HTTP2 = "http2"
  HTTP2_AND_3 = "http2and3"
  HTTP3 = "http3"


class PriceClass(str, Enum):
  PRICE_CLASS_100 = "PriceClass_100"
  PRICE_CLASS_200 = "PriceClass_200"
  PRICE_CLASS_ALL = "PriceClass_All"


class SecurityPolicyProtocol(str, Enum):
  SSL_V3 = "SSLv3"
  TLS_V1 = "TLSv1"
  TLS_V1_2016 = "TLSv1_2016"
  TLS_V1_1_2016 = "TLSv1.1_2016"
  TLS_V1_2_2018 = "TLSv1.2_2018"
  TLS_V1_2_2019 = "TLSv1.2_2019"
  TLS_V1_2_2021 = "TLSv1.2_2021"


def coerce_enum(enum_cls: type[E], value: E | str, field_name: str) -> E:
  """Convert a configuration string to an enum member."""
  if isinstance(value, enum_cls):
    return value
  try:
    return enum_cls(value)
  except ValueError:
    allowed = ", ".join(str(member.value) for member in enum_cls)
    raise ConfigurationError(
      f"{field_name}: {value!r} is not one of {allowed}"
    ) from None


def unique(values: Iterable[str]) -> tuple[str, ...]:
  """Drop duplicates while keeping first-seen order."""
  return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class BlockPublicAccess:
  block_public_acls: bool = True
  ignore_public_acls: bool = True
  block_public_policy: bool = True
  restrict_public_buckets: bool = True


@dataclass(frozen=True)
class WebsiteRedirect:
  host_name: str
  protocol: RedirectProtocol


@dataclass(frozen=True)
class Bucket:
  """An S3 bucket owned by the stack.

  Buckets are never destroyed with the stack: anything other than
  ``RemovalPolicy.RETAIN`` is rejected.
  """

  node_id: str
  mode: BucketMode
  versioned: bool
  encryption: BucketEncryption = BucketEncryption.S3_MANAGED
  bucket_name: str | None = None
  block_public_access: BlockPublicAccess | None = None
  website_redirect: WebsiteRedirect | None = None
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN

  def __post_init__(self) -> None:
    if self.removal_policy != RemovalPolicy.RETAIN:
      raise ConfigurationError(
        f"{self.node_id}: buckets must use the retain removal policy"
      )


@dataclass(frozen=True)
class CertificateRef:
  """A certificate that already exists in ACM. Never created or modified."""

  arn: str
  account: str
  region: str
  certificate_id: str
  subject_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class HostedZoneRef:
  """A Route 53 hosted zone that already exists. Never created or modified."""

  hosted_zone_id: str
  zone_name: str


@dataclass(frozen=True)
class CorsRules:
  allow_origins: tuple[str, ...]
  allow_headers: tuple[str, ...]
  allow_methods: tuple[str, ...]
  allow_credentials: bool = False
  expose_headers: tuple[str, ...] = ()
  origin_override: bool = False


@dataclass(frozen=True)
class ResponseHeaderPolicy:
  name: str
  cors: CorsRules
  comment: str = ""


@dataclass(frozen=True)
class KeyBehavior:
  """Cache key behavior for cookies, headers or query strings."""

  kind: BehaviorKind
  keys: tuple[str, ...] = ()

  @classmethod
  def none(cls) -> "KeyBehavior":
    return cls(BehaviorKind.NONE)

  @classmethod
  def all(cls) -> "KeyBehavior":
    return cls(BehaviorKind.ALL)

  @classmethod
  def allow_list(cls, *keys: str) -> "KeyBehavior":
    return cls(BehaviorKind.ALLOW_LIST, unique(keys))

  @classmethod
  def deny_list(cls, *keys: str) -> "KeyBehavior":
    return cls(BehaviorKind.DENY_LIST, unique(keys))


@dataclass(frozen=True)
class CachePolicy:
  """CloudFront cache policy. TTLs are in seconds."""

  name: str
  cookie_behavior: KeyBehavior
  header_behavior: KeyBehavior
  query_string_behavior: KeyBehavior
  min_ttl: int
  default_ttl: int
  max_ttl: int
  enable_accept_encoding_gzip: bool = False
  enable_accept_encoding_brotli: bool = False
  comment: str = ""


@dataclass(frozen=True)
class Origin:
  host_name: str
  protocol_policy: OriginProtocolPolicy
  source_node: str


@dataclass(frozen=True)
class DefaultBehavior:
  origin: Origin
  cache_policy: CachePolicy
  response_headers_policy: ResponseHeaderPolicy
  allowed_methods: AllowedMethods = AllowedMethods.GET_HEAD
  cached_methods: CachedMethods = CachedMethods.GET_HEAD
  viewer_protocol_policy: ViewerProtocolPolicy = ViewerProtocolPolicy.REDIRECT_TO_HTTPS
  compress: bool = True


@dataclass(frozen=True)
class Distribution:
  domain_names: tuple[str, ...]
  certificate: CertificateRef
  default_behavior: DefaultBehavior
  enable_ipv6: bool = True
  http_version: HttpVersion = HttpVersion.HTTP2
  price_class: PriceClass = PriceClass.PRICE_CLASS_ALL
  minimum_protocol_version: SecurityPolicyProtocol = SecurityPolicyProtocol.TLS_V1_2_2021
  comment: str = ""
  default_root_object: str = ""
  enabled: bool = True
