"""In-memory implementation of material request storage."""

from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime

from stockledger.config import get_logger
from stockledger.core.entities.material_request import MaterialRequest, RequestStatus
from stockledger.core.interfaces.material_request_store import IMaterialRequestStore
from stockledger.infrastructure.storage.memory.locks import KeyedLock

logger = get_logger(__name__)


class MemoryMaterialRequestStore(IMaterialRequestStore):
    """Volatile material request storage."""

    def __init__(self) -> None:
        self._requests: dict[str, MaterialRequest] = {}
        self._locks = KeyedLock()
        self._seq = 0

    def lock(self, request_id: str) -> AbstractAsyncContextManager[None]:
        """Serialize mutations for one material request."""
        return self._locks.acquire(request_id)

    async def create_request(self, request: MaterialRequest) -> MaterialRequest:
        """Create a new material request."""
        self._seq += 1
        stored = request.model_copy(deep=True)
        if stored.id is None:
            stored.id = f"SM-{self._seq:04d}"
        for index, item in enumerate(stored.items, start=1):
            if item.id is None:
                item.id = f"{stored.id}-{index:02d}"
        now = datetime.now(UTC)
        stored.created_at = now
        stored.updated_at = now
        self._requests[stored.id] = stored
        logger.info(
            "material_request_created",
            request_id=stored.id,
            items=len(stored.items),
        )
        return stored.model_copy(deep=True)

    async def get_request(self, request_id: str) -> MaterialRequest | None:
        """Get material request by ID."""
        request = self._requests.get(request_id)
        return request.model_copy(deep=True) if request else None

    async def save_request(self, request: MaterialRequest) -> MaterialRequest:
        """Replace the stored request."""
        stored = request.model_copy(deep=True, update={"updated_at": datetime.now(UTC)})
        self._requests[stored.id] = stored  # type: ignore[index]
        logger.debug("material_request_saved", request_id=stored.id)
        return stored.model_copy(deep=True)

    async def list_requests(
        self, status: RequestStatus | None = None
    ) -> list[MaterialRequest]:
        """List material requests, newest first."""
        requests = [
            r for r in self._requests.values() if status is None or r.status == status
        ]
        requests.sort(key=lambda r: (r.request_date, r.created_at), reverse=True)
        return [r.model_copy(deep=True) for r in requests]
