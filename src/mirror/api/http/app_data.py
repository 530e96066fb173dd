from dataclasses import dataclass

from src.mirror.core.services import (
    Aggregator,
    DocumentStoreService,
    Importer,
    StoreGateway,
    UpstreamClient,
    UserService,
)


@dataclass
class ApplicationDependencies:
    """Process-wide collaborators, constructed once at startup."""

    store_service: DocumentStoreService
    upstream_client: UpstreamClient
    gateway: StoreGateway
    importer: Importer
    aggregator: Aggregator
    user_service: UserService

    @classmethod
    def build(
        cls,
        store_service: DocumentStoreService,
        upstream_client: UpstreamClient,
    ) -> "ApplicationDependencies":
        """Wire the services on top of a store and an upstream client."""
        gateway = StoreGateway(
            store_service.users, store_service.posts, store_service.comments
        )
        return cls(
            store_service=store_service,
            upstream_client=upstream_client,
            gateway=gateway,
            importer=Importer(gateway, upstream_client),
            aggregator=Aggregator(gateway),
            user_service=UserService(gateway),
        )

    async def aclose(self) -> None:
        await self.upstream_client.aclose()
        self.store_service.close()
