"""Dependency helpers exposing the application's shared objects.

The store, the configuration and the recommendation service are created
once in the FastAPI lifespan and kept on ``app.state``; these wrappers hand
them to endpoints through `Depends`.
"""

from fastapi import Request

from core.config import AppConfig
from database.store import DietStore


def get_store(request: Request) -> DietStore:
    """Return the store opened at startup."""
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_recommendation_service(request: Request):
    """Return the `RecommendationService` bound to the running store."""
    return request.app.state.recommendation_service
