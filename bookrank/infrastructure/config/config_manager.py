"""
Centralized Configuration Manager
=================================
모든 설정을 환경변수(.env 포함)에서 로드합니다.

주요 기능:
- 환경변수에서 설정 로드 (from_env)
- 시작 시 설정 검증 (validate)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """
    애플리케이션 설정

    Attributes:
        max_browser_sessions: 동시에 열 수 있는 브라우저 세션 수 상한
        session_acquire_timeout: 빈 세션 슬롯을 기다리는 최대 시간 (초)
        fetch_timeout_seconds: 정적 페이지 요청 전체 타임아웃 (초)
        rate_limit: 스크래핑 엔드포인트 인바운드 레이트리밋 (slowapi 표기)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    # Browser
    browser_headless: bool = True
    max_browser_sessions: int = 3
    session_acquire_timeout: float = 60.0

    # Static fetch
    fetch_timeout_seconds: float = 20.0

    # HTTP shell
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    rate_limit: str = "30/minute"
    rate_limit_enabled: bool = True

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경변수에서 설정 로드"""
        config = cls()

        config.host = os.environ.get("HOST", config.host)
        config.port = int(os.environ.get("PORT", str(config.port)))
        config.log_level = os.environ.get("LOG_LEVEL", config.log_level).upper()

        config.browser_headless = _env_bool("BROWSER_HEADLESS", config.browser_headless)
        config.max_browser_sessions = int(
            os.environ.get("MAX_BROWSER_SESSIONS", str(config.max_browser_sessions))
        )
        config.session_acquire_timeout = float(
            os.environ.get("SESSION_ACQUIRE_TIMEOUT", str(config.session_acquire_timeout))
        )
        config.fetch_timeout_seconds = float(
            os.environ.get("FETCH_TIMEOUT_SECONDS", str(config.fetch_timeout_seconds))
        )

        origins = os.environ.get("ALLOWED_ORIGINS", "*")
        config.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]
        config.rate_limit = os.environ.get("RATE_LIMIT", config.rate_limit)
        config.rate_limit_enabled = _env_bool("RATE_LIMIT_ENABLED", config.rate_limit_enabled)

        return config

    def validate(self) -> list[str]:
        """설정 검증

        Returns:
            오류 메시지 목록 (빈 리스트 = 정상)
        """
        errors: list[str] = []

        if self.port < 1 or self.port > 65535:
            errors.append(f"PORT 범위 오류: 1-65535 필요, 현재 {self.port}")

        if self.max_browser_sessions < 1:
            errors.append(
                f"MAX_BROWSER_SESSIONS는 1 이상이어야 합니다 (현재 {self.max_browser_sessions})"
            )

        if self.session_acquire_timeout <= 0:
            errors.append("SESSION_ACQUIRE_TIMEOUT는 0보다 커야 합니다")

        if self.fetch_timeout_seconds <= 0:
            errors.append("FETCH_TIMEOUT_SECONDS는 0보다 커야 합니다")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"알 수 없는 LOG_LEVEL: {self.log_level}")

        if "*" in self.allowed_origins:
            logger.warning("[Config Warning] ALLOWED_ORIGINS='*' (모든 origin 허용)")

        return errors

    @classmethod
    def from_env_validated(cls, fail_fast: bool = True) -> "AppConfig":
        """환경변수에서 설정 로드 + 검증

        Raises:
            RuntimeError: fail_fast=True이고 검증 실패 시
        """
        config = cls.from_env()
        errors = config.validate()

        if errors:
            error_msg = "설정 검증 실패:\n" + "\n".join(f"  - {e}" for e in errors)
            if fail_fast:
                raise RuntimeError(error_msg)
            logger.error(error_msg)

        return config

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "browser_headless": self.browser_headless,
            "max_browser_sessions": self.max_browser_sessions,
            "fetch_timeout_seconds": self.fetch_timeout_seconds,
            "rate_limit": self.rate_limit if self.rate_limit_enabled else None,
        }
