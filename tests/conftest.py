import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """테스트 시작 전 환경 설정 로드"""
    project_root = Path(__file__).parent.parent

    env_file = os.environ.get("ENV_FILE", ".env.test")
    env_path = project_root / env_file

    if env_path.exists():
        load_dotenv(env_path, override=True)
        print(f"\n[conftest] Applied test overrides from: {env_path}")
    else:
        print(f"\n[conftest] No {env_file} found, using base environment only")


@pytest.fixture
def mock_session():
    """열고 닫기만 기록하는 BrowserSession 대역"""
    session = MagicMock()
    session.open = AsyncMock(return_value=session)
    session.navigate = AsyncMock(return_value=["navigate"])
    session.content = AsyncMock(return_value="<html><body></body></html>")
    session.close = AsyncMock()
    return session


@pytest.fixture
def mock_session_factory(mock_session):
    """항상 같은 mock_session을 돌려주는 BrowserSessionFactory 대역"""
    factory = MagicMock()
    factory.create = MagicMock(return_value=mock_session)
    return factory


@pytest.fixture
def mock_fetcher():
    """StaticFetcher 대역"""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value="<html><body></body></html>")
    return fetcher
