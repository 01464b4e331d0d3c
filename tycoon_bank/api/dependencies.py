"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from tycoon_bank.config import settings
from tycoon_bank.domain.random_source import PythonRandomSource, RandomSource


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_random_source() -> RandomSource:
    """Per-request random source, pinned when TYCOON_BANK_RANDOM_SEED is set"""
    return PythonRandomSource(settings.random_seed)
