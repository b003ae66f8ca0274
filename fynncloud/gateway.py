"""Authenticated request gateway.

Every backend call goes through :class:`RequestGateway`. When the backend
answers 401 the gateway refreshes the session once, no matter how many calls
failed at the same time, and replays each of them with the new session.
"""

import asyncio
from collections import deque
from typing import Any, Deque, Optional

from endpoints import AUTH
from .client import CloudClient
from .errors import ApiError
from .state import Router, SessionState
from .utils import get_logger

LOGIN_PATH = "/auth/login"
REFRESH_INTERRUPTED = "Session refresh was interrupted"


class RefreshCoordinator:
    """Single-flight guard for the refresh call plus the FIFO of parked callers."""

    def __init__(self) -> None:
        self.refreshing = False
        self._waiters: Deque[asyncio.Future] = deque()

    @property
    def pending(self) -> int:
        return len(self._waiters)

    def start(self) -> bool:
        """Claim the refresh. Returns False if another caller already holds it."""
        if self.refreshing:
            return False
        self.refreshing = True
        return True

    def wait(self) -> "asyncio.Future[None]":
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        return waiter

    def release(self, error: Optional[BaseException] = None) -> int:
        """Settle every parked caller with the refresh outcome and empty the queue."""
        waiters, self._waiters = self._waiters, deque()
        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(None)
        return len(waiters)

    def finish(self) -> None:
        self.refreshing = False


class RequestGateway:
    def __init__(
        self,
        client: CloudClient,
        session: Optional[SessionState] = None,
        router: Optional[Router] = None,
        coordinator: Optional[RefreshCoordinator] = None,
    ):
        self.client = client
        self.session = session or SessionState()
        self.router = router or Router()
        self.coordinator = coordinator or RefreshCoordinator()
        self.logger = get_logger("fynncloud.gateway")

    @staticmethod
    def _is_refresh_call(path: str) -> bool:
        return AUTH["refresh"]["path"] in path

    def _logout(self) -> None:
        self.logger.info("Session expired, login required")
        self.session.clear()
        self.router.push(LOGIN_PATH)

    async def refresh(self) -> Any:
        return await self.client.request(AUTH["refresh"]["method"], AUTH["refresh"]["path"])

    async def execute(self, path: str, method: str = "GET", **options: Any) -> Any:
        try:
            return await self.client.request(method, path, **options)
        except ApiError as exc:
            if exc.status_code != 401:
                raise
            if self._is_refresh_call(path):
                self._logout()
                raise
            return await self._refresh_and_replay(path, method, **options)

    async def _refresh_and_replay(self, path: str, method: str, **options: Any) -> Any:
        if not self.coordinator.start():
            self.logger.debug("Refresh in flight, parking %s %s", method, path)
            await self.coordinator.wait()
            return await self.client.request(method, path, **options)

        self.logger.debug("Got 401 on %s %s, refreshing session", method, path)
        try:
            await self.refresh()
        except asyncio.CancelledError:
            # Parked callers are not cancelled themselves; they fail instead of hanging.
            interrupted = ApiError(401, REFRESH_INTERRUPTED, path=AUTH["refresh"]["path"])
            dropped = self.coordinator.release(interrupted)
            self.logger.warning("Session refresh cancelled, rejecting %d waiting call(s)", dropped)
            raise
        except Exception as err:
            dropped = self.coordinator.release(err)
            self.logger.warning("Session refresh failed (%s), rejecting %d waiting call(s)", err, dropped)
            self._logout()
            raise
        else:
            resumed = self.coordinator.release()
            self.logger.debug("Session refreshed, resuming %d waiting call(s)", resumed)
        finally:
            self.coordinator.finish()
        return await self.client.request(method, path, **options)
