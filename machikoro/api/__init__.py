"""
API Module - HTTP access to matches.

- schemas: Pydantic request/response models
- service: framework-agnostic business logic
- app: FastAPI application factory
"""

from .service import MatchService

__all__ = ["MatchService"]
