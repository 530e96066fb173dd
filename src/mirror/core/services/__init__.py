"""Core services exports."""

from .aggregator import Aggregator
from .database.store_service import DocumentStoreService
from .importer import Importer, ImportSummary
from .store_gateway import StoreGateway
from .upstream_client import UpstreamClient
from .user_service import UserService

__all__ = [
    "Aggregator",
    "DocumentStoreService",
    "Importer",
    "ImportSummary",
    "StoreGateway",
    "UpstreamClient",
    "UserService",
]
