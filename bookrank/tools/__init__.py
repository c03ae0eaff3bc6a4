"""
Tool modules - organized into sub-packages

Sub-packages:
- scrapers: 브라우저 세션, 정적 fetch, 렌더링 대기, 서점별 추출기
"""
