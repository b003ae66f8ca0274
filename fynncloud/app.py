from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .client import CloudClient
from .files import FileSync
from .gateway import RequestGateway
from .messages import Translator
from .quota import QuotaStore
from .session_store import save_session
from .state import Router, SessionState


@dataclass
class AppState:
    client: CloudClient
    session: SessionState
    router: Router
    gateway: RequestGateway
    quota: QuotaStore
    files: FileSync
    session_path: Optional[str] = None

    def save(self) -> None:
        if self.session_path:
            save_session(self.session_path, self.client.cookies, self.client.tokens, self.session.user)

    async def close(self) -> None:
        await self.client.close()


def build_app(
    base_url: Optional[str] = None,
    cookies: Optional[httpx.Cookies] = None,
    tokens: Optional[Dict[str, Any]] = None,
    user: Optional[Dict[str, Any]] = None,
    session_path: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    translator: Optional[Translator] = None,
) -> AppState:
    client = CloudClient(base_url=base_url, cookies=cookies, tokens=tokens, transport=transport)
    session = SessionState(user=user)
    router = Router()
    gateway = RequestGateway(client, session=session, router=router)
    quota = QuotaStore(gateway)
    files = FileSync(gateway, router=router, refresh_quota=quota.refresh, translator=translator)
    return AppState(
        client=client,
        session=session,
        router=router,
        gateway=gateway,
        quota=quota,
        files=files,
        session_path=session_path,
    )
