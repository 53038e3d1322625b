"""Builds the complete edge resource graph from configuration."""

import logging

from .config import BlockPublicAccessConfig, EdgeConfig, KeyBehaviorConfig
from .distribution import assemble_distribution
from .exceptions import ConfigurationError
from .graph import GraphBuilder, ResourceGraph
from .identity import import_certificate, import_hosted_zone
from .models import (
  BehaviorKind,
  BlockPublicAccess,
  BucketMode,
  KeyBehavior,
  coerce_enum,
)
from .origin import website_endpoint, wrap_origin
from .policies import build_cache_policy, build_cors_policy, cors_rules
from .storage import build_bucket

logger = logging.getLogger(__name__)

IMAGES_BUCKET = "images-bucket"
REDIRECT_BUCKET = "redirect-bucket"
CERTIFICATE = "certificate"
HOSTED_ZONE = "hosted-zone"
RESPONSE_HEADERS_POLICY = "response-headers-policy"
CACHE_POLICY = "cache-policy"
WEBSITE_ORIGIN = "website-origin"
DISTRIBUTION = "distribution"


def _block_public_access(config: BlockPublicAccessConfig | None) -> BlockPublicAccess | None:
  if config is None:
    return None
  return BlockPublicAccess(
    block_public_acls=config.block_public_acls,
    ignore_public_acls=config.ignore_public_acls,
    block_public_policy=config.block_public_policy,
    restrict_public_buckets=config.restrict_public_buckets,
  )


def _key_behavior(config: KeyBehaviorConfig, field_name: str) -> KeyBehavior:
  kind = coerce_enum(BehaviorKind, config.behavior, field_name)
  if kind is BehaviorKind.ALLOW_LIST:
    return KeyBehavior.allow_list(*config.keys)
  if kind is BehaviorKind.DENY_LIST:
    return KeyBehavior.deny_list(*config.keys)
  # Keys on none/all are rejected by the cache policy builder.
  return KeyBehavior(kind, tuple(config.keys))


def build_topology(config: EdgeConfig) -> ResourceGraph:
  """Construct leaves, then the origin, then the distribution."""
  logger.info("Building edge resource graph for %s", config.stack_id)
  builder = GraphBuilder()

  images = build_bucket(
    IMAGES_BUCKET,
    BucketMode.VERSIONED_PRIVATE,
    bucket_name=config.images_bucket.bucket_name,
    block_public_access=_block_public_access(config.images_bucket.block_public_access),
  )
  builder.add_owned(IMAGES_BUCKET, images)

  redirect = build_bucket(
    REDIRECT_BUCKET,
    BucketMode.REDIRECT_WEBSITE,
    bucket_name=config.redirect_bucket.bucket_name,
    redirect_host=config.redirect_bucket.redirect_host,
    redirect_protocol=config.redirect_bucket.redirect_protocol,
    block_public_access=_block_public_access(config.redirect_bucket.block_public_access),
  )
  builder.add_owned(REDIRECT_BUCKET, redirect)

  certificate = import_certificate(
    config.certificate_arn,
    subject_names=config.certificate_subject_names,
  )
  builder.add_imported(CERTIFICATE, certificate)
  builder.add_imported(HOSTED_ZONE, import_hosted_zone(config.hosted_zone_id, config.zone_name))

  headers_policy = build_cors_policy(
    config.stack_id,
    cors_rules(
      allow_origins=config.cors.allow_origins,
      allow_headers=config.cors.allow_headers,
      allow_methods=config.cors.allow_methods,
      allow_credentials=config.cors.allow_credentials,
      expose_headers=config.cors.expose_headers,
      origin_override=config.cors.origin_override,
    ),
    name=config.cors.name,
    comment=config.cors.comment,
  )
  builder.add_owned(RESPONSE_HEADERS_POLICY, headers_policy)

  cache_policy = build_cache_policy(
    config.stack_id,
    cookie_behavior=_key_behavior(config.cache.cookies, "cache.cookies"),
    header_behavior=_key_behavior(config.cache.headers, "cache.headers"),
    query_string_behavior=_key_behavior(config.cache.query_strings, "cache.query_strings"),
    min_ttl=config.cache.min_ttl,
    default_ttl=config.cache.default_ttl,
    max_ttl=config.cache.max_ttl,
    enable_accept_encoding_gzip=config.cache.enable_accept_encoding_gzip,
    enable_accept_encoding_brotli=config.cache.enable_accept_encoding_brotli,
    name=config.cache.name,
    comment=config.cache.comment,
  )
  builder.add_owned(CACHE_POLICY, cache_policy)

  host_name = config.origin.host_name
  if not host_name:
    if not redirect.bucket_name:
      raise ConfigurationError(
        "origin.host_name is required when the redirect bucket has no bucket_name"
      )
    host_name = website_endpoint(redirect.bucket_name, config.region)
  origin = wrap_origin(redirect, host_name, config.origin.protocol_policy)
  builder.add_owned(WEBSITE_ORIGIN, origin, depends_on=[REDIRECT_BUCKET])

  dist = config.distribution
  distribution = assemble_distribution(
    certificate,
    config.domain_names,
    origin,
    cache_policy,
    headers_policy,
    allowed_methods=dist.allowed_methods,
    cached_methods=dist.cached_methods,
    viewer_protocol_policy=dist.viewer_protocol_policy,
    compress=dist.compress,
    enable_ipv6=dist.enable_ipv6,
    http_version=dist.http_version,
    price_class=dist.price_class,
    minimum_protocol_version=dist.minimum_protocol_version,
    comment=dist.comment,
    default_root_object=dist.default_root_object,
    enabled=dist.enabled,
  )
  builder.add_owned(
    DISTRIBUTION,
    distribution,
    depends_on=[CERTIFICATE, WEBSITE_ORIGIN, CACHE_POLICY, RESPONSE_HEADERS_POLICY],
  )

  return builder.build()
