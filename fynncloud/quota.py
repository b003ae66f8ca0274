from dataclasses import dataclass
from typing import Optional

from endpoints import QUOTA
from .errors import ApiError
from .gateway import RequestGateway
from .models import Quota
from .state import Observable
from .utils import get_logger


@dataclass
class QuotaState(Observable):
    quota: Optional[Quota] = None


class QuotaStore:
    def __init__(self, gateway: RequestGateway, state: Optional[QuotaState] = None):
        self.gateway = gateway
        self.state = state or QuotaState()
        self.logger = get_logger("fynncloud.quota")

    @property
    def quota(self) -> Optional[Quota]:
        return self.state.quota

    async def refresh(self) -> Quota:
        data = await self.gateway.execute(QUOTA["get"]["path"], method=QUOTA["get"]["method"])
        if not isinstance(data, dict):
            raise ApiError(200, f"Unexpected quota response: {data!r}", payload=data, path=QUOTA["get"]["path"])
        quota = Quota(total_bytes=int(data.get("totalBytes", 0)), used_bytes=int(data.get("usedBytes", 0)))
        self.logger.debug("Quota used=%d total=%d", quota.used_bytes, quota.total_bytes)
        self.state.set(quota=quota)
        return quota
