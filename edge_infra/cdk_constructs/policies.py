"""CloudFront response headers and cache policies."""

from aws_cdk import Duration
from aws_cdk import aws_cloudfront as cloudfront
from constructs import Construct

from ..models import BehaviorKind, CachePolicy, KeyBehavior, ResponseHeaderPolicy


class CorsResponseHeadersPolicy(Construct):
  """Response headers policy carrying only a CORS behavior."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    policy: ResponseHeaderPolicy,
  ) -> None:
    super().__init__(scope, id)

    cors = policy.cors
    self.policy = cloudfront.ResponseHeadersPolicy(
      self,
      "Default",
      response_headers_policy_name=policy.name,
      comment=policy.comment or None,
      cors_behavior=cloudfront.ResponseHeadersCorsBehavior(
        access_control_allow_origins=list(cors.allow_origins),
        access_control_allow_headers=list(cors.allow_headers),
        access_control_allow_methods=list(cors.allow_methods),
        access_control_allow_credentials=cors.allow_credentials,
        access_control_expose_headers=list(cors.expose_headers) or None,
        origin_override=cors.origin_override,
      ),
    )


def _cookie_behavior(behavior: KeyBehavior) -> cloudfront.CacheCookieBehavior:
  return {
    BehaviorKind.NONE: cloudfront.CacheCookieBehavior.none,
    BehaviorKind.ALL: cloudfront.CacheCookieBehavior.all,
    BehaviorKind.ALLOW_LIST: cloudfront.CacheCookieBehavior.allow_list,
    BehaviorKind.DENY_LIST: cloudfront.CacheCookieBehavior.deny_list,
  }[behavior.kind](*behavior.keys)


def _header_behavior(behavior: KeyBehavior) -> cloudfront.CacheHeaderBehavior:
  if behavior.kind is BehaviorKind.ALLOW_LIST:
    return cloudfront.CacheHeaderBehavior.allow_list(*behavior.keys)
  return cloudfront.CacheHeaderBehavior.none()


def _query_string_behavior(behavior: KeyBehavior) -> cloudfront.CacheQueryStringBehavior:
  return {
    BehaviorKind.NONE: cloudfront.CacheQueryStringBehavior.none,
    BehaviorKind.ALL: cloudfront.CacheQueryStringBehavior.all,
    BehaviorKind.ALLOW_LIST: cloudfront.CacheQueryStringBehavior.allow_list,
    BehaviorKind.DENY_LIST: cloudfront.CacheQueryStringBehavior.deny_list,
  }[behavior.kind](*behavior.keys)


class EdgeCachePolicy(Construct):
  """Cache policy controlling the cache key and TTLs."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    policy: CachePolicy,
  ) -> None:
    super().__init__(scope, id)

    self.policy = cloudfront.CachePolicy(
      self,
      "Default",
      cache_policy_name=policy.name,
      comment=policy.comment or None,
      cookie_behavior=_cookie_behavior(policy.cookie_behavior),
      header_behavior=_header_behavior(policy.header_behavior),
      query_string_behavior=_query_string_behavior(policy.query_string_behavior),
      min_ttl=Duration.seconds(policy.min_ttl),
      default_ttl=Duration.seconds(policy.default_ttl),
      max_ttl=Duration.seconds(policy.max_ttl),
      enable_accept_encoding_gzip=policy.enable_accept_encoding_gzip,
      enable_accept_encoding_brotli=policy.enable_accept_encoding_brotli,
    )
