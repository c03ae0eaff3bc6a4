"""Application layer: 요청 단위 스크래핑 흐름"""
