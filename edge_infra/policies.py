"""CORS response headers policy and cache policy builders.

Both builders are pure: the same arguments always give the same policy,
including its name, so re-synthesis updates the existing policy in place.
"""

import re
from collections.abc import Iterable

from .exceptions import ConfigurationError
from .models import (
  BehaviorKind,
  CachePolicy,
  CorsRules,
  KeyBehavior,
  ResponseHeaderPolicy,
  unique,
)

CORS_METHODS = ("GET", "HEAD", "PUT", "POST", "PATCH", "DELETE", "OPTIONS")
MAX_POLICY_NAME_LENGTH = 128

_NAME_INVALID_RE = re.compile(r"[^A-Za-z0-9_-]+")


def policy_name(stack_id: str, suffix: str) -> str:
  """Derive a CloudFront policy name from the stack identity."""
  name = _NAME_INVALID_RE.sub("-", f"{stack_id}-{suffix}").strip("-")
  if not name:
    raise ConfigurationError("Cannot derive a policy name from an empty stack id")
  return name[:MAX_POLICY_NAME_LENGTH]


def _check_name(name: str) -> str:
  if not name or _NAME_INVALID_RE.search(name) or len(name) > MAX_POLICY_NAME_LENGTH:
    raise ConfigurationError(
      f"Policy name {name!r} must be 1-{MAX_POLICY_NAME_LENGTH} letters, digits, '-' or '_'"
    )
  return name


def cors_rules(
  *,
  allow_origins: Iterable[str],
  allow_headers: Iterable[str],
  allow_methods: Iterable[str],
  allow_credentials: bool = False,
  expose_headers: Iterable[str] = (),
  origin_override: bool = False,
) -> CorsRules:
  return CorsRules(
    allow_origins=unique(allow_origins),
    allow_headers=unique(allow_headers),
    allow_methods=unique(method.upper() for method in allow_methods),
    allow_credentials=allow_credentials,
    expose_headers=unique(expose_headers),
    origin_override=origin_override,
  )


def build_cors_policy(
  stack_id: str,
  cors: CorsRules,
  *,
  name: str | None = None,
  comment: str = "",
) -> ResponseHeaderPolicy:
  """Validate CORS rules and wrap them in a named response headers policy."""
  if not cors.allow_origins:
    raise ConfigurationError("CORS policy needs at least one allowed origin")
  if not cors.allow_headers:
    raise ConfigurationError("CORS policy needs at least one allowed header")
  if not cors.allow_methods:
    raise ConfigurationError("CORS policy needs at least one allowed method")

  if "ALL" in cors.allow_methods and len(cors.allow_methods) > 1:
    raise ConfigurationError("CORS method 'ALL' cannot be combined with other methods")
  unknown = [m for m in cors.allow_methods if m != "ALL" and m not in CORS_METHODS]
  if unknown:
    raise ConfigurationError(f"Unsupported CORS methods: {', '.join(unknown)}")

  if cors.allow_credentials and any("*" in origin for origin in cors.allow_origins):
    raise ConfigurationError("CORS policy cannot allow credentials for wildcard origins")

  return ResponseHeaderPolicy(
    name=_check_name(name) if name else policy_name(stack_id, "ResponseHeadersPolicy"),
    cors=cors,
    comment=comment,
  )


def _check_behavior(
  field_name: str,
  behavior: KeyBehavior,
  allowed: set[BehaviorKind],
) -> None:
  if behavior.kind not in allowed:
    raise ConfigurationError(
      f"{field_name} does not support the {behavior.kind.value!r} behavior"
    )
  if behavior.kind in (BehaviorKind.ALLOW_LIST, BehaviorKind.DENY_LIST):
    if not behavior.keys:
      raise ConfigurationError(f"{field_name} {behavior.kind.value} needs at least one key")
  elif behavior.keys:
    raise ConfigurationError(
      f"{field_name} {behavior.kind.value} behavior does not take keys"
    )


def build_cache_policy(
  stack_id: str,
  *,
  cookie_behavior: KeyBehavior,
  header_behavior: KeyBehavior,
  query_string_behavior: KeyBehavior,
  min_ttl: int,
  default_ttl: int,
  max_ttl: int,
  enable_accept_encoding_gzip: bool = False,
  enable_accept_encoding_brotli: bool = False,
  name: str | None = None,
  comment: str = "",
) -> CachePolicy:
  """Validate cache key behaviors and TTLs (in seconds)."""
  every_kind = set(BehaviorKind)
  _check_behavior("cookie_behavior", cookie_behavior, every_kind)
  # Cache policies can only key on named headers.
  _check_behavior(
    "header_behavior", header_behavior, {BehaviorKind.NONE, BehaviorKind.ALLOW_LIST}
  )
  _check_behavior("query_string_behavior", query_string_behavior, every_kind)

  if min(min_ttl, default_ttl, max_ttl) < 0:
    raise ConfigurationError("Cache policy TTLs cannot be negative")
  if not min_ttl <= default_ttl <= max_ttl:
    raise ConfigurationError(
      f"Cache policy TTLs must satisfy min <= default <= max, "
      f"got {min_ttl} / {default_ttl} / {max_ttl}"
    )

  return CachePolicy(
    name=_check_name(name) if name else policy_name(stack_id, "CachePolicy"),
    cookie_behavior=cookie_behavior,
    header_behavior=header_behavior,
    query_string_behavior=query_string_behavior,
    min_ttl=min_ttl,
    default_ttl=default_ttl,
    max_ttl=max_ttl,
    enable_accept_encoding_gzip=enable_accept_encoding_gzip,
    enable_accept_encoding_brotli=enable_accept_encoding_brotli,
    comment=comment,
  )
