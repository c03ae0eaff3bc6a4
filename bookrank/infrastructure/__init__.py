"""
Infrastructure Layer
====================
설정 로드 등 외부 환경과 맞닿는 코드
"""
