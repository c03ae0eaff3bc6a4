"""
Book Domain Entities
====================
도서 관련 핵심 엔티티: BookSummary, BookDetail, Provider, RenderMode

모든 엔티티는 요청 단위로 생성되고 응답 후 폐기됩니다.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RenderMode(str, Enum):
    """서점 페이지 렌더링 방식"""

    STATIC = "static"  # 초기 HTML에 콘텐츠 포함 (HTTP fetch로 충분)
    DYNAMIC = "dynamic"  # 스크립트 실행 필요 (헤드리스 브라우저)


class Provider(BaseModel):
    """
    서점(Provider) 정의

    Attributes:
        code: 경로에 쓰이는 서점 코드 (kr, us, jp, es)
        name: 서점 이름
        origin: 상대 경로를 절대 URL로 바꿀 때 쓰는 origin
        list_url: 베스트셀러 목록 페이지 URL
        list_mode: 목록 페이지 렌더링 방식
        locale: 브라우저 세션 언어
    """

    code: str
    name: str
    origin: str
    list_url: str
    list_mode: RenderMode
    locale: str = "en-US"

    model_config = {"frozen": True}


class BookSummary(BaseModel):
    """
    베스트셀러 목록의 도서 한 건

    image / link는 항상 절대 URL이며, 빈 텍스트 필드는 서점별 placeholder
    (예: "저자 미상")로 채워집니다.
    """

    title: str = Field(..., description="도서 제목")
    author: str = Field(..., description="저자 (없으면 placeholder)")
    publisher: Optional[str] = Field(default=None, description="출판사 (목록에서 제공하는 서점만)")
    image: str = Field(default="", description="표지 이미지 절대 URL")
    link: str = Field(default="", description="상세 페이지 절대 URL")

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "소년이 온다",
                "author": "한강",
                "publisher": "창비",
                "image": "https://image.aladin.co.kr/product/4086/97/cover150/8936434128_2.jpg",
                "link": "https://www.aladin.co.kr/shop/wproduct.aspx?ItemId=40869703",
            }
        }
    }


class BookDetail(BaseModel):
    """
    도서 상세 정보

    모든 필드는 best-effort이며 빈 문자열은 "찾지 못함"을 의미합니다.
    서점별 추가 필드(characteristics, dimensions, pageCount, isbn)는 해당
    서점에서만 채워지고, 나머지 서점 응답에서는 생략됩니다.
    """

    description: str = ""
    plot: Optional[str] = None
    authorInfo: Optional[str] = None
    publisher: Optional[str] = None
    publishDate: Optional[str] = None

    # El Corte Inglés 전용
    characteristics: Optional[str] = None
    dimensions: Optional[str] = None
    pageCount: Optional[str] = None
    isbn: Optional[str] = None

    def to_response(self) -> dict:
        """응답 JSON (해당 서점이 다루지 않는 필드는 제외)"""
        return self.model_dump(exclude_none=True)
