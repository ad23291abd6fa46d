"""Abstract interface for material request storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from stockledger.core.entities.material_request import MaterialRequest, RequestStatus


class IMaterialRequestStore(ABC):
    """Interface for material request persistence."""

    @abstractmethod
    def lock(self, request_id: str) -> AbstractAsyncContextManager[None]:
        """Serialize mutations for one material request."""
        pass

    @abstractmethod
    async def create_request(self, request: MaterialRequest) -> MaterialRequest:
        """Create a new material request, assigning request and item IDs."""
        pass

    @abstractmethod
    async def get_request(self, request_id: str) -> MaterialRequest | None:
        """Get material request by ID."""
        pass

    @abstractmethod
    async def save_request(self, request: MaterialRequest) -> MaterialRequest:
        """Replace the stored request (items, status, links)."""
        pass

    @abstractmethod
    async def list_requests(
        self, status: RequestStatus | None = None
    ) -> list[MaterialRequest]:
        """List material requests, newest first, optionally by status."""
        pass
