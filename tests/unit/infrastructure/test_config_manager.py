"""
ConfigManager (AppConfig) 단위 테스트
"""

import os
from unittest.mock import patch

import pytest

from bookrank.infrastructure.config.config_manager import AppConfig

# =============================================================================
# AppConfig 기본 생성 테스트
# =============================================================================


class TestAppConfigDefaults:
    """AppConfig 기본값 테스트"""

    def test_default_values(self):
        config = AppConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 4000
        assert config.browser_headless is True
        assert config.max_browser_sessions == 3
        assert config.fetch_timeout_seconds == 20.0
        assert config.allowed_origins == ["*"]
        assert config.rate_limit == "30/minute"


# =============================================================================
# from_env 테스트
# =============================================================================


class TestAppConfigFromEnv:
    """AppConfig.from_env 테스트"""

    def test_loads_server_settings(self):
        with patch.dict(os.environ, {"PORT": "8080", "HOST": "127.0.0.1", "LOG_LEVEL": "debug"}):
            config = AppConfig.from_env()
        assert config.port == 8080
        assert config.host == "127.0.0.1"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("raw,expected", [("false", False), ("0", False), ("true", True), ("", True)])
    def test_headless_flag(self, raw, expected):
        with patch.dict(os.environ, {"BROWSER_HEADLESS": raw}):
            assert AppConfig.from_env().browser_headless is expected

    def test_browser_limits(self):
        env = {"MAX_BROWSER_SESSIONS": "5", "SESSION_ACQUIRE_TIMEOUT": "10", "FETCH_TIMEOUT_SECONDS": "7.5"}
        with patch.dict(os.environ, env):
            config = AppConfig.from_env()
        assert config.max_browser_sessions == 5
        assert config.session_acquire_timeout == 10.0
        assert config.fetch_timeout_seconds == 7.5

    def test_allowed_origins_split(self):
        with patch.dict(os.environ, {"ALLOWED_ORIGINS": "http://a.com, http://b.com,"}):
            assert AppConfig.from_env().allowed_origins == ["http://a.com", "http://b.com"]

    def test_rate_limit(self):
        with patch.dict(os.environ, {"RATE_LIMIT": "5/second", "RATE_LIMIT_ENABLED": "no"}):
            config = AppConfig.from_env()
        assert config.rate_limit == "5/second"
        assert config.rate_limit_enabled is False


# =============================================================================
# validate 테스트
# =============================================================================


class TestAppConfigValidate:
    def test_valid(self):
        assert AppConfig(allowed_origins=["http://localhost"]).validate() == []

    def test_invalid_port(self):
        errors = AppConfig(port=70000).validate()
        assert any("PORT" in e for e in errors)

    def test_invalid_sessions(self):
        errors = AppConfig(max_browser_sessions=0).validate()
        assert any("MAX_BROWSER_SESSIONS" in e for e in errors)

    def test_invalid_timeouts(self):
        errors = AppConfig(session_acquire_timeout=0, fetch_timeout_seconds=-1).validate()
        assert len(errors) == 2

    def test_unknown_log_level(self):
        errors = AppConfig(log_level="LOUD").validate()
        assert any("LOG_LEVEL" in e for e in errors)

    def test_fail_fast(self):
        with patch.dict(os.environ, {"PORT": "0"}):
            with pytest.raises(RuntimeError, match="설정 검증 실패"):
                AppConfig.from_env_validated()

    def test_no_fail_fast_returns_config(self):
        with patch.dict(os.environ, {"PORT": "0"}):
            config = AppConfig.from_env_validated(fail_fast=False)
        assert config.port == 0

    def test_to_dict_hides_disabled_rate_limit(self):
        assert AppConfig(rate_limit_enabled=False).to_dict()["rate_limit"] is None
