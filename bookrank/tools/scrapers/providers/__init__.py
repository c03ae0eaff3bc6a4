"""
Provider Registry
=================
서점 코드 → ProviderAdapter

새 서점은 모듈에 ADAPTER를 정의하고 여기 등록하면 라우트가 자동으로 생깁니다.
"""

from .aladin import ADAPTER as ALADIN_ADAPTER
from .amazon import ADAPTER as AMAZON_ADAPTER
from .base import ProviderAdapter
from .elcorteingles import ADAPTER as CORTE_INGLES_ADAPTER
from .kinokuniya import ADAPTER as KINOKUNIYA_ADAPTER

PROVIDER_ADAPTERS: dict[str, ProviderAdapter] = {
    adapter.code: adapter
    for adapter in (ALADIN_ADAPTER, AMAZON_ADAPTER, KINOKUNIYA_ADAPTER, CORTE_INGLES_ADAPTER)
}

__all__ = ["PROVIDER_ADAPTERS", "ProviderAdapter"]
