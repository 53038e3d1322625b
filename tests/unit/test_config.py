"""Tests for the configuration loader."""

import tempfile
from pathlib import Path

import pytest

from edge_infra.config import Config, DistributionConfig, parse_duration
from edge_infra.exceptions import ConfigurationError

BASE = """
stacks:
  - stack_id: EdgeOne
    certificate_arn: arn:aws:acm:us-east-1:123456789012:certificate/b08418e0-443b-408d-9094-ba6e716ede2b
    hosted_zone_id: Z1234567890
    zone_name: example.com
    domain_names: [example.com]
"""


def _load(yaml_content: str) -> Config:
  with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
    f.write(yaml_content)
    f.flush()

    return Config.from_yaml(Path(f.name))


class TestParseDuration:
  """Test duration parsing."""

  @pytest.mark.parametrize(
    ("value", "seconds"),
    [(0, 0), (30, 30), ("0s", 0), ("5m", 300), ("2h", 7200), ("1d", 86400), ("365d", 31536000)],
  )
  def test_valid(self, value: int | str, seconds: int) -> None:
    """Verify supported units."""
    assert parse_duration(value) == seconds

  @pytest.mark.parametrize("value", ["1w", "-1", "soon", -5, True])
  def test_invalid(self, value: int | str) -> None:
    """Verify unsupported values are rejected."""
    with pytest.raises(ConfigurationError):
      parse_duration(value)


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self) -> None:
    """Test loading a minimal configuration."""
    config = _load(BASE)

    assert len(config.stacks) == 1
    stack = config.stacks[0]
    assert stack.stack_id == "EdgeOne"
    assert stack.hosted_zone_id == "Z1234567890"
    assert stack.domain_names == ["example.com"]
    assert stack.region == "us-east-1"
    assert stack.account is None

  def test_defaults_match_production(self) -> None:
    """Test unset sections fall back to the production settings."""
    stack = _load(BASE).stacks[0]

    assert stack.cors.allow_origins == ["*"]
    assert stack.cors.allow_methods == [
      "GET", "HEAD", "PUT", "POST", "PATCH", "DELETE", "OPTIONS"
    ]
    assert stack.cors.allow_credentials is False
    assert stack.cache.default_ttl == 86400
    assert stack.cache.max_ttl == 31536000
    assert stack.distribution == DistributionConfig()
    assert stack.distribution.minimum_protocol_version == "TLSv1.1_2016"

  def test_load_with_defaults(self) -> None:
    """Test stack entries inherit the defaults section."""
    config = _load(
      """
defaults:
  region: us-west-1
  account: "123456789012"
  tags:
    Project: edge
"""
      + BASE
    )

    stack = config.stacks[0]
    assert stack.region == "us-west-1"
    assert stack.account == "123456789012"
    assert stack.tags == {"Project": "edge"}

  def test_stack_overrides_defaults(self) -> None:
    """Test stack-specific config overrides defaults."""
    config = _load("defaults:\n  region: us-west-1\n" + BASE + "    region: eu-west-1\n")

    assert config.stacks[0].region == "eu-west-1"

  def test_cache_section(self) -> None:
    """Test cache behaviors and durations are parsed."""
    config = _load(
      BASE
      + """
    cache:
      cookies: all
      headers:
        behavior: allow-list
        keys: [Origin]
      query_strings:
        behavior: allow-list
        keys: nope
      min_ttl: 0s
      default_ttl: 1h
      max_ttl: 1d
"""
    )

    cache = config.stacks[0].cache
    assert cache.cookies.behavior == "all"
    assert cache.headers.keys == ["Origin"]
    assert cache.query_strings.keys == ["nope"]
    assert (cache.min_ttl, cache.default_ttl, cache.max_ttl) == (0, 3600, 86400)

  def test_bucket_sections(self) -> None:
    """Test bucket settings are parsed."""
    config = _load(
      BASE
      + """
    images_bucket:
      block_public_access:
        block_public_policy: true
    redirect_bucket:
      bucket_name: example.com
      redirect_host: www.example.com
      redirect_protocol: https
"""
    )

    stack = config.stacks[0]
    assert stack.images_bucket.block_public_access.block_public_policy is True
    assert stack.images_bucket.block_public_access.block_public_acls is True
    assert stack.redirect_bucket.bucket_name == "example.com"
    assert stack.redirect_bucket.redirect_host == "www.example.com"

  @pytest.mark.parametrize("section", ["images_bucket", "redirect_bucket", "distribution"])
  def test_destroy_removal_policy_rejected(self, section: str) -> None:
    """Test destructive removal policies cannot be configured."""
    with pytest.raises(ConfigurationError, match="retain"):
      _load(BASE + f"    {section}:\n      removal_policy: destroy\n")

  def test_retain_removal_policy_accepted(self) -> None:
    """Test an explicit retain is allowed."""
    config = _load(BASE + "    images_bucket:\n      removal_policy: retain\n")

    assert len(config.stacks) == 1

  def test_missing_required_field(self) -> None:
    """Test stacks without a certificate ARN are rejected."""
    with pytest.raises(ConfigurationError, match="certificate_arn"):
      _load(BASE.replace("certificate_arn", "cert"))

  def test_load_multiple_stacks(self) -> None:
    """Test loading multiple stacks."""
    second = BASE.replace("stacks:\n", "").replace("EdgeOne", "EdgeTwo")
    config = _load(BASE + second)

    assert [stack.stack_id for stack in config.stacks] == ["EdgeOne", "EdgeTwo"]

  def test_shipped_config(self) -> None:
    """Test the repository's edge.yaml loads."""
    config = Config.from_yaml(Path(__file__).parents[2] / "edge.yaml")

    assert config.stacks[0].zone_name == "dnd5eapi.co"
    assert config.stacks[0].cache.query_strings.keys == ["nope"]

  def test_construct_ids(self) -> None:
    """Test construct id overrides are read per stack."""
    config = _load(
      BASE + "    construct_ids:\n      cache-policy: DndCachePolicy\n      distribution: 42\n"
    )

    assert config.stacks[0].construct_ids == {
      "cache-policy": "DndCachePolicy",
      "distribution": "42",
    }

  def test_construct_ids_default_empty(self) -> None:
    """Test construct ids are empty when not configured."""
    assert _load(BASE).stacks[0].construct_ids == {}

  def test_construct_ids_must_be_mapping(self) -> None:
    """Test a construct_ids list is rejected."""
    with pytest.raises(ConfigurationError, match="construct_ids"):
      _load(BASE + "    construct_ids: [DndCachePolicy]\n")

  @pytest.mark.parametrize("content", ["stacks:\n", "stacks: []\n", "", "defaults:\n"])
  def test_no_stacks(self, content: str) -> None:
    """Test an empty or bare stacks key loads no stacks."""
    assert _load(content).stacks == []

  @pytest.mark.parametrize(
    "content",
    [
      "stacks:\n  - just-a-string\n",
      "stacks:\n  - 42\n",
      "stacks:\n  - [a, b]\n",
    ],
  )
  def test_stack_entry_must_be_mapping(self, content: str) -> None:
    """Test a stack entry that is not a mapping is rejected."""
    with pytest.raises(ConfigurationError, match=r"stacks\[0\] must be a mapping"):
      _load(content)

  def test_stacks_must_be_list(self) -> None:
    """Test a stacks mapping is rejected."""
    with pytest.raises(ConfigurationError, match="stacks must be a list"):
      _load("stacks:\n  stack_id: EdgeOne\n")

  def test_top_level_must_be_mapping(self) -> None:
    """Test a file holding a plain list is rejected."""
    with pytest.raises(ConfigurationError, match="top level must be a mapping"):
      _load("- stack_id: EdgeOne\n")
