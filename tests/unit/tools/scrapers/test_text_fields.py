"""
Text field extraction 단위 테스트 (문자열만으로 검증)
"""

from bookrank.tools.scrapers.text_fields import (
    author_from_role_line,
    collect_section,
    find_role_line,
    first_long_text,
    match_labeled_value,
    publisher_from_role_parts,
    value_after_colon,
)


class TestRoleLine:
    """구분자 메타데이터 줄에서 저자 추출"""

    def test_author_from_role_line(self):
        assert author_from_role_line(["Jane Doe | Author | Publisher X"]) == "Jane Doe"

    def test_korean_role_line(self):
        lines = ["[국내도서] 소년이 온다", "한강 (지은이) | 창비 | 2014년 5월", "10,800원"]
        assert find_role_line(lines) == ["한강 (지은이)", "창비", "2014년 5월"]

    def test_first_matching_line_wins(self):
        lines = ["A (지은이) | P1", "B (지은이) | P2"]
        assert author_from_role_line(lines) == "A (지은이)"

    def test_line_without_delimiter_ignored(self):
        assert find_role_line(["한강 (지은이)"]) is None

    def test_line_without_keyword_ignored(self):
        assert author_from_role_line(["10,800원 | 5% 할인"]) is None

    def test_publisher_skips_role_segment(self):
        parts = ["Jane Doe", "Author", "Publisher X"]
        assert publisher_from_role_parts(parts) == "Publisher X"

    def test_publisher_skips_parenthesized_roles(self):
        parts = ["한강 (지은이)", "홍길동 (옮긴이)", "창비", "2014년 5월"]
        assert publisher_from_role_parts(parts) == "창비"

    def test_publisher_missing(self):
        assert publisher_from_role_parts(["Jane Doe", "Author"]) is None


class TestMatchLabeledValue:
    """정규식 라벨 캡처"""

    def test_isbn_digits(self):
        text = "Editorial: Plaza & Janés\nISBN: 9788401027321\nNº de páginas: 320"
        assert match_labeled_value(text, "ISBN", r"[0-9]+") == "9788401027321"

    def test_page_count_label_variants(self):
        assert match_labeled_value("N° de páginas 412", r"N[º°]\s*de\s*páginas", r"\d+") == "412"
        assert match_labeled_value("Nº de páginas\n96", r"N[º°]\s*de\s*páginas", r"\d+") == "96"

    def test_value_stops_at_line_end(self):
        text = "Dimensiones: 15 x 23 cm\nISBN: 1"
        assert match_labeled_value(text, "Dimensiones") == "15 x 23 cm"

    def test_case_insensitive(self):
        assert match_labeled_value("editorial: Anagrama", "Editorial") == "Anagrama"

    def test_missing(self):
        assert match_labeled_value("nothing here", "ISBN", r"[0-9]+") is None
        assert match_labeled_value("", "ISBN") is None


class TestValueAfterColon:
    def test_detail_bullet(self):
        assert value_after_colon("Publisher : Flatiron Books", ["Publisher"]) == "Flatiron Books"

    def test_invisible_marks_removed(self):
        text = "Publication date \u200f : \u200e February 6, 2024"
        assert value_after_colon(text, ["Publication date"]) == "February 6, 2024"

    def test_splits_on_first_colon_only(self):
        assert value_after_colon("Publisher: A: B", ["Publisher"]) == "A: B"

    def test_label_missing(self):
        assert value_after_colon("Language : English", ["Publisher"]) is None


class TestCollectSection:
    def test_between_start_and_stop(self):
        text = "内容説明\n本の説明\n著者紹介\n1970年生まれ。\n\n作家。\n目次\n第1章"
        assert collect_section(text, ["著者紹介"], ["目次"]) == "1970年生まれ。\n作家。"

    def test_stop_before_start_ignored(self):
        text = "目次\n著者紹介\n略歴"
        assert collect_section(text, ["著者紹介"], ["目次"]) == "略歴"

    def test_no_start(self):
        assert collect_section("a\nb", ["著者紹介"], ["目次"]) == ""


class TestFirstLongText:
    def test_threshold_is_exclusive(self):
        assert first_long_text(["x" * 50, "y" * 51], 50) == "y" * 51

    def test_none_long_enough(self):
        assert first_long_text(["short", None], 10) == ""
