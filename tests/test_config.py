"""
Tests for CSRKey Cache configuration.

Tests cover:
- Defaults and partial configuration
- Cache option resolution
- Loading settings from the environment
"""
import pytest
from pydantic import ValidationError

from csrkey_cache import BoundedCacheOptions, CsrKeyCacheConfig


class TestBoundedCacheOptions:
    """Tests for default cache options."""

    def test_defaults(self):
        opts = BoundedCacheOptions()
        assert opts.max == 1024
        assert opts.max_age == 900
        assert opts.length is None
        assert opts.dispose is None
        assert opts.stale is False

    def test_max_age_from_milliseconds(self):
        """Test maxAge is read in milliseconds into max_age seconds."""
        assert BoundedCacheOptions(maxAge=5000).max_age == 5
        assert BoundedCacheOptions(max_age=5).max_age == 5
        opts = BoundedCacheOptions.model_validate({'max': 2, 'maxAge': 1000})
        assert opts.max == 2
        assert opts.max_age == 1

    def test_max_age_wins_over_max_age_ms(self):
        assert BoundedCacheOptions(max_age=3, maxAge=1000).max_age == 3

    def test_invalid_max(self):
        with pytest.raises(ValidationError):
            BoundedCacheOptions(max=0)

    def test_negative_max_age(self):
        with pytest.raises(ValidationError):
            BoundedCacheOptions(max_age=-1)


class TestCsrKeyCacheConfig:
    """Tests for key cache configuration."""

    def test_defaults(self):
        config = CsrKeyCacheConfig()
        assert config.keylength == 32
        assert isinstance(config.cache, BoundedCacheOptions)
        assert config.provided_cache is False

    def test_none_cache_uses_defaults(self):
        config = CsrKeyCacheConfig(cache=None)
        assert config.cache == BoundedCacheOptions()

    def test_mapping_merged_over_defaults(self):
        """Test a partial mapping keeps the remaining defaults."""
        config = CsrKeyCacheConfig(cache={'max': 2})
        assert config.cache.max == 2
        assert config.cache.max_age == 900

    def test_provided_cache(self, recorder):
        config = CsrKeyCacheConfig(cache=recorder)
        assert config.cache is recorder
        assert config.provided_cache is True

    def test_frozen(self):
        """Test configuration cannot change once built."""
        config = CsrKeyCacheConfig()
        with pytest.raises(ValidationError):
            config.keylength = 8

    def test_settings_trusted_as_given(self):
        """Test keylength and csrng are not checked at construction."""
        config = CsrKeyCacheConfig(keylength=0, csrng='not a function')
        assert config.keylength == 0
        assert config.csrng == 'not a function'

    def test_integer_cache_is_max(self):
        config = CsrKeyCacheConfig(cache=7)
        assert config.cache == BoundedCacheOptions(max=7)
        assert config.provided_cache is False

    def test_unrecognized_cache_uses_defaults(self):
        config = CsrKeyCacheConfig(cache='lru')
        assert config.cache == BoundedCacheOptions()


class TestFromEnv:
    """Tests for CsrKeyCacheConfig.from_env()."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            'CSRKEY_KEYLENGTH', 'CSRKEY_CACHE_MAX',
            'CSRKEY_CACHE_MAX_AGE', 'CSRKEY_CACHE_STALE',
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults_without_env(self):
        config = CsrKeyCacheConfig.from_env()
        assert config.keylength == 32
        assert config.cache == BoundedCacheOptions()

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv('CSRKEY_KEYLENGTH', '16')
        monkeypatch.setenv('CSRKEY_CACHE_MAX', '10')
        monkeypatch.setenv('CSRKEY_CACHE_MAX_AGE', '60')
        monkeypatch.setenv('CSRKEY_CACHE_STALE', 'true')
        config = CsrKeyCacheConfig.from_env()
        assert config.keylength == 16
        assert config.cache.max == 10
        assert config.cache.max_age == 60
        assert config.cache.stale is True

    def test_overrides_take_precedence(self, monkeypatch, recorder):
        monkeypatch.setenv('CSRKEY_KEYLENGTH', '16')
        config = CsrKeyCacheConfig.from_env(keylength=8, cache=recorder)
        assert config.keylength == 8
        assert config.cache is recorder

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv('CSRKEY_CACHE_MAX', 'lots')
        with pytest.raises(ValueError):
            CsrKeyCacheConfig.from_env()
