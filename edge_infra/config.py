"""Configuration loader for edge stacks."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: int | str, field_name: str = "duration") -> int:
  """Convert ``30``, ``"30s"``, ``"5m"``, ``"2h"`` or ``"1d"`` to seconds."""
  if isinstance(value, bool):
    raise ConfigurationError(f"{field_name}: {value!r} is not a duration")
  if isinstance(value, int):
    if value < 0:
      raise ConfigurationError(f"{field_name}: durations cannot be negative")
    return value
  match = _DURATION_RE.match(str(value))
  if not match:
    raise ConfigurationError(f"{field_name}: {value!r} is not a duration")
  return int(match.group(1)) * _DURATION_UNITS[match.group(2)]


def _check_retain(data: dict[str, Any], where: str) -> None:
  # Buckets and the distribution always outlive the stack.
  removal_policy = str(data.get("removal_policy", "retain")).lower()
  if removal_policy != "retain":
    raise ConfigurationError(
      f"{where}: removal_policy {removal_policy!r} is not allowed, only 'retain'"
    )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
  value = data.get(key) or {}
  if not isinstance(value, dict):
    raise ConfigurationError(f"{key} must be a mapping")
  return value


def _string_list(value: Any, field_name: str) -> list[str]:
  if value is None:
    return []
  if isinstance(value, str):
    return [value]
  if not isinstance(value, list):
    raise ConfigurationError(f"{field_name} must be a list of strings")
  return [str(item) for item in value]


@dataclass
class BlockPublicAccessConfig:
  block_public_acls: bool = True
  ignore_public_acls: bool = True
  block_public_policy: bool = False
  restrict_public_buckets: bool = False


@dataclass
class BucketConfig:
  """Configuration for one of the two buckets."""

  bucket_name: str | None = None
  block_public_access: BlockPublicAccessConfig | None = None
  redirect_host: str | None = None
  redirect_protocol: str | None = None


@dataclass
class OriginConfig:
  host_name: str | None = None  # Derived from the redirect bucket when unset
  protocol_policy: str = "http-only"


@dataclass
class CorsConfig:
  name: str | None = None
  comment: str = "Allows all origins for CORS requests, including preflight requests"
  allow_origins: list[str] = field(default_factory=lambda: ["*"])
  allow_headers: list[str] = field(default_factory=lambda: ["*"])
  allow_methods: list[str] = field(
    default_factory=lambda: ["GET", "HEAD", "PUT", "POST", "PATCH", "DELETE", "OPTIONS"]
  )
  allow_credentials: bool = False
  expose_headers: list[str] = field(default_factory=lambda: ["*"])
  origin_override: bool = False


@dataclass
class KeyBehaviorConfig:
  behavior: str = "none"
  keys: list[str] = field(default_factory=list)


@dataclass
class CacheConfig:
  name: str | None = None
  comment: str = ""
  cookies: KeyBehaviorConfig = field(default_factory=KeyBehaviorConfig)
  headers: KeyBehaviorConfig = field(default_factory=KeyBehaviorConfig)
  query_strings: KeyBehaviorConfig = field(default_factory=KeyBehaviorConfig)
  min_ttl: int = 0
  default_ttl: int = 86400
  max_ttl: int = 31536000
  enable_accept_encoding_gzip: bool = False
  enable_accept_encoding_brotli: bool = False


@dataclass
class DistributionConfig:
  comment: str = ""
  default_root_object: str = ""
  enabled: bool = True
  allowed_methods: str = "GET_HEAD_OPTIONS"
  cached_methods: str = "GET_HEAD"
  viewer_protocol_policy: str = "allow-all"
  compress: bool = False
  enable_ipv6: bool = True
  http_version: str = "http2"
  price_class: str = "PriceClass_All"
  minimum_protocol_version: str = "TLSv1.1_2016"


@dataclass
class EdgeConfig:
  """Configuration for a single edge stack."""

  stack_id: str
  certificate_arn: str
  hosted_zone_id: str
  zone_name: str
  domain_names: list[str]
  region: str = "us-east-1"
  account: str | None = None
  description: str = ""
  certificate_subject_names: list[str] = field(default_factory=list)
  images_bucket: BucketConfig = field(default_factory=BucketConfig)
  redirect_bucket: BucketConfig = field(default_factory=BucketConfig)
  origin: OriginConfig = field(default_factory=OriginConfig)
  cors: CorsConfig = field(default_factory=CorsConfig)
  cache: CacheConfig = field(default_factory=CacheConfig)
  distribution: DistributionConfig = field(default_factory=DistributionConfig)
  tags: dict[str, str] = field(default_factory=dict)
  # Node id -> construct id, to keep the logical ids of an existing stack
  construct_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
  """Edge stack configuration file."""

  stacks: list[EdgeConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "edge.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
      raise ConfigurationError(f"{path}: top level must be a mapping")

    defaults = _section(data, "defaults")
    stacks_data = data.get("stacks") or []
    if not isinstance(stacks_data, list):
      raise ConfigurationError("stacks must be a list")
    stacks: list[EdgeConfig] = []
    for i, stack_data in enumerate(stacks_data):
      if not isinstance(stack_data, dict):
        raise ConfigurationError(f"stacks[{i}] must be a mapping")
      # Merge defaults with stack-specific config
      stacks.append(_parse_stack({**defaults, **stack_data}))

    return cls(stacks=stacks)


def _parse_bucket(data: dict[str, Any], where: str) -> BucketConfig:
  _check_retain(data, where)
  bpa_data = data.get("block_public_access")
  block_public_access = None
  if bpa_data is not None:
    if not isinstance(bpa_data, dict):
      raise ConfigurationError(f"{where}.block_public_access must be a mapping")
    block_public_access = BlockPublicAccessConfig(
      block_public_acls=bpa_data.get("block_public_acls", True),
      ignore_public_acls=bpa_data.get("ignore_public_acls", True),
      block_public_policy=bpa_data.get("block_public_policy", False),
      restrict_public_buckets=bpa_data.get("restrict_public_buckets", False),
    )
  return BucketConfig(
    bucket_name=data.get("bucket_name"),
    block_public_access=block_public_access,
    redirect_host=data.get("redirect_host"),
    redirect_protocol=data.get("redirect_protocol"),
  )


def _parse_key_behavior(data: Any, where: str) -> KeyBehaviorConfig:
  if data is None:
    return KeyBehaviorConfig()
  if isinstance(data, str):
    return KeyBehaviorConfig(behavior=data)
  if not isinstance(data, dict):
    raise ConfigurationError(f"{where} must be a behavior name or mapping")
  return KeyBehaviorConfig(
    behavior=str(data.get("behavior", "none")),
    keys=_string_list(data.get("keys"), f"{where}.keys"),
  )


def _parse_stack(data: dict[str, Any]) -> EdgeConfig:
  for key in ("stack_id", "certificate_arn", "hosted_zone_id", "zone_name"):
    if not data.get(key):
      raise ConfigurationError(f"Stack configuration is missing {key!r}")
  stack_id = data["stack_id"]

  cors_data = _section(data, "cors")
  cors_defaults = CorsConfig()
  cors = CorsConfig(
    name=cors_data.get("name"),
    comment=cors_data.get("comment", cors_defaults.comment),
    allow_origins=_string_list(
      cors_data.get("allow_origins", cors_defaults.allow_origins), "cors.allow_origins"
    ),
    allow_headers=_string_list(
      cors_data.get("allow_headers", cors_defaults.allow_headers), "cors.allow_headers"
    ),
    allow_methods=_string_list(
      cors_data.get("allow_methods", cors_defaults.allow_methods), "cors.allow_methods"
    ),
    allow_credentials=cors_data.get("allow_credentials", False),
    expose_headers=_string_list(
      cors_data.get("expose_headers", cors_defaults.expose_headers), "cors.expose_headers"
    ),
    origin_override=cors_data.get("origin_override", False),
  )

  cache_data = _section(data, "cache")
  cache = CacheConfig(
    name=cache_data.get("name"),
    comment=cache_data.get("comment", ""),
    cookies=_parse_key_behavior(cache_data.get("cookies"), "cache.cookies"),
    headers=_parse_key_behavior(cache_data.get("headers"), "cache.headers"),
    query_strings=_parse_key_behavior(cache_data.get("query_strings"), "cache.query_strings"),
    min_ttl=parse_duration(cache_data.get("min_ttl", 0), "cache.min_ttl"),
    default_ttl=parse_duration(cache_data.get("default_ttl", "1d"), "cache.default_ttl"),
    max_ttl=parse_duration(cache_data.get("max_ttl", "365d"), "cache.max_ttl"),
    enable_accept_encoding_gzip=cache_data.get("enable_accept_encoding_gzip", False),
    enable_accept_encoding_brotli=cache_data.get("enable_accept_encoding_brotli", False),
  )

  origin_data = _section(data, "origin")
  origin = OriginConfig(
    host_name=origin_data.get("host_name"),
    protocol_policy=origin_data.get("protocol_policy", "http-only"),
  )

  dist_data = _section(data, "distribution")
  _check_retain(dist_data, "distribution")
  defaults = DistributionConfig()
  distribution = DistributionConfig(
    **{name: dist_data.get(name, getattr(defaults, name)) for name in vars(defaults)}
  )

  return EdgeConfig(
    stack_id=stack_id,
    certificate_arn=data["certificate_arn"],
    hosted_zone_id=data["hosted_zone_id"],
    zone_name=data["zone_name"],
    domain_names=_string_list(data.get("domain_names"), "domain_names"),
    region=data.get("region", "us-east-1"),
    account=str(data["account"]) if data.get("account") else None,
    description=data.get("description", ""),
    certificate_subject_names=_string_list(
      data.get("certificate_subject_names"), "certificate_subject_names"
    ),
    images_bucket=_parse_bucket(_section(data, "images_bucket"), "images_bucket"),
    redirect_bucket=_parse_bucket(_section(data, "redirect_bucket"), "redirect_bucket"),
    origin=origin,
    cors=cors,
    cache=cache,
    distribution=distribution,
    tags={str(k): str(v) for k, v in _section(data, "tags").items()},
    construct_ids={
      str(k): str(v) for k, v in _section(data, "construct_ids").items()
    },
  )
