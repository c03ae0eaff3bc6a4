"""
Logging Setup
=============
루트 로거 설정 (서버 시작 시 한 번 호출)
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """루트 로거에 콘솔 핸들러와 공통 포맷 적용"""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    # Playwright/aiohttp 내부 로그는 경고 이상만
    for noisy in ("asyncio", "aiohttp.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
