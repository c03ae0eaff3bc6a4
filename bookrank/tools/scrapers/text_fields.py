"""
Text Field Extraction
=====================
원문 텍스트에서 필드를 뽑아내는 순수 함수 모음

페이지 자동화 계층과 분리되어 있어 문자열만으로 단위 테스트할 수 있습니다.

- 구분자(|)로 나뉜 메타데이터 줄에서 저자 추출
- "라벨: 값" 형태의 줄에서 값 추출 (정규식 / 콜론 분리)
- 시작/종료 키워드로 구간 텍스트 수집
"""

import re
from collections.abc import Iterable, Sequence
from typing import Optional

# 알라딘 목록의 저자 줄에 붙는 역할 키워드
AUTHOR_ROLE_KEYWORDS = (
    "지은이",
    "옮긴이",
    "엮은이",
    "글",
    "그림",
    "Author",
    "Translator",
    "Illustrator",
)

_INVISIBLE = re.compile(r"[\u200e\u200f\u200b\ufeff]")


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """키워드 중 하나라도 부분 문자열로 포함되는지"""
    return any(keyword in text for keyword in keywords)


def split_delimited(line: str, delimiter: str = "|") -> list[str]:
    """구분자로 나누고 각 조각의 공백 제거"""
    return [part.strip() for part in line.split(delimiter)]


def find_role_line(
    lines: Iterable[str],
    keywords: Sequence[str] = AUTHOR_ROLE_KEYWORDS,
    delimiter: str = "|",
) -> Optional[list[str]]:
    """
    구분자와 역할 키워드를 모두 가진 첫 줄을 조각 리스트로 반환

    첫 번째로 조건을 만족하는 줄에서 탐색을 멈춥니다.
    """
    for line in lines:
        line = line.strip()
        if delimiter in line and contains_any(line, keywords):
            return split_delimited(line, delimiter)
    return None


def author_from_role_line(
    lines: Iterable[str],
    keywords: Sequence[str] = AUTHOR_ROLE_KEYWORDS,
    delimiter: str = "|",
) -> Optional[str]:
    """
    "Jane Doe | Author | Publisher X" → "Jane Doe"

    역할 키워드가 있는 줄의 첫 조각을 저자로 봅니다.
    """
    parts = find_role_line(lines, keywords, delimiter)
    if parts and parts[0]:
        return parts[0]
    return None


def is_role_segment(segment: str, keywords: Sequence[str] = AUTHOR_ROLE_KEYWORDS) -> bool:
    """"Author" 처럼 역할만 있는 조각, 또는 "한강 (지은이)" 처럼 괄호 역할이 붙은 조각"""
    segment = segment.strip()
    return segment in keywords or any(f"({keyword})" in segment for keyword in keywords)


def publisher_from_role_parts(
    parts: Sequence[str],
    keywords: Sequence[str] = AUTHOR_ROLE_KEYWORDS,
) -> Optional[str]:
    """
    "Jane Doe | Author | Publisher X" 조각들 → "Publisher X"

    저자 다음 조각 중 역할 조각이 아닌 첫 조각을 출판사로 봅니다.
    """
    for part in parts[1:]:
        if part and not is_role_segment(part, keywords):
            return part
    return None


def match_labeled_value(
    text: str, label_pattern: str, value_pattern: str = r"[^\n]+"
) -> Optional[str]:
    """
    "라벨: 값" 줄에서 값 캡처 (대소문자 무시)

    예: match_labeled_value("ISBN: 9788401", "ISBN", r"[0-9]+") → "9788401"
    """
    if not text:
        return None
    match = re.search(rf"{label_pattern}[:\s]+({value_pattern})", text, re.IGNORECASE)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def value_after_colon(text: str, labels: Iterable[str]) -> Optional[str]:
    """
    라벨이 들어 있는 줄이면 첫 콜론 뒤의 값을 반환

    Amazon 상세 bullet처럼 라벨과 콜론 사이에 보이지 않는 문자가 끼는
    경우가 있어 먼저 제거합니다.
    """
    text = _INVISIBLE.sub("", text or "")
    if not contains_any(text, labels) or ":" not in text:
        return None
    value = text.split(":", 1)[1].strip()
    return value or None


def collect_section(
    text: str, start_keywords: Sequence[str], stop_keywords: Sequence[str]
) -> str:
    """
    시작 키워드가 나온 다음 줄부터 종료 키워드 줄 직전까지 수집

    - 빈 줄은 건너뜀
    - 시작 키워드가 있는 줄 자체는 포함하지 않음
    - 종료 키워드는 구간이 시작된 뒤에만 의미가 있음
    """
    collected: list[str] = []
    in_section = False

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if contains_any(line, start_keywords):
            in_section = True
            continue
        if in_section:
            if contains_any(line, stop_keywords):
                break
            collected.append(line)

    return "\n".join(collected)


def first_long_text(texts: Iterable[str], min_length: int) -> str:
    """길이가 min_length를 넘는 첫 텍스트 (없으면 빈 문자열)"""
    for text in texts:
        text = (text or "").strip()
        if len(text) > min_length:
            return text
    return ""
