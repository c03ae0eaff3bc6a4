"""HTTP layer (FastAPI)"""
