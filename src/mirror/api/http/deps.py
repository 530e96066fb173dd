"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.mirror.api.http.app_data import ApplicationDependencies
from src.mirror.core.services import Aggregator, Importer, UserService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_importer(request: Request) -> Importer:
    """Get the Importer instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.importer


def get_aggregator(request: Request) -> Aggregator:
    """Get the Aggregator instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.aggregator


def get_user_service(request: Request) -> UserService:
    """Get the User service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_service
