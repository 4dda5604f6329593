"""Tollgate HTTP API (FastAPI)."""
