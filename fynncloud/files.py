"""Cached, optimistically updated view of the user's files.

:class:`FileSync` owns a :class:`~fynncloud.state.FilesState`. Listings replace
it wholesale; mutations patch it from the server's answer once the call has
succeeded, so a failed call never leaves a half-applied change behind.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from endpoints import FILES
from .errors import ApiError
from .gateway import RequestGateway
from .messages import Translator, delete_description
from .models import BreadcrumbItem, FileIndex, FileItem
from .state import FilesState, Router
from .utils import get_logger

GENERIC_ERROR = "An error occurred"
HOME_PATH = "/"
TRASH_PATH = "/trash"

# create_folder default: the folder currently shown.
CURRENT_FOLDER = object()

RECENT_CRUMB = BreadcrumbItem(name="Recent", label_key="navigation.recentFiles", icon="clock", path="/recent")
FAVORITES_CRUMB = BreadcrumbItem(name="Favorites", label_key="navigation.favoriteFiles", icon="star", path="/favorites")
SHARED_CRUMB = BreadcrumbItem(name="Shared", label_key="navigation.sharedFiles", icon="share", path="/shared")


def normalize_trash_breadcrumbs(crumbs: Sequence[BreadcrumbItem]) -> List[BreadcrumbItem]:
    """Label the trash root and give every crumb a flat ``/trash[/<id>]`` path."""
    out: List[BreadcrumbItem] = []
    for index, crumb in enumerate(crumbs):
        fixed = BreadcrumbItem(
            name=crumb.name,
            id=crumb.id,
            label_key=crumb.label_key,
            icon=crumb.icon,
            color=crumb.color,
            path=TRASH_PATH,
        )
        if index == 0 and crumb.name == "Trash":
            fixed.label_key = "navigation.trash"
            fixed.icon = "trash"
            fixed.color = "red"
        if index > 0 and crumb.id:
            fixed.path = f"{TRASH_PATH}/{crumb.id}"
        out.append(fixed)
    return out


def _copy_crumbs(crumbs: Sequence[BreadcrumbItem]) -> List[BreadcrumbItem]:
    return [BreadcrumbItem(**crumb.__dict__) for crumb in crumbs]


class FileSync:
    def __init__(
        self,
        gateway: RequestGateway,
        state: Optional[FilesState] = None,
        router: Optional[Router] = None,
        refresh_quota: Optional[Callable[[], Awaitable[Any]]] = None,
        translator: Optional[Translator] = None,
    ):
        self.gateway = gateway
        self.state = state or FilesState()
        self.router = router or gateway.router
        self.refresh_quota = refresh_quota
        self.translator = translator or Translator()
        self.logger = get_logger("fynncloud.files")

    # listings

    async def _execute_fetch(
        self,
        endpoint: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        custom_breadcrumbs: Optional[Sequence[BreadcrumbItem]] = None,
    ) -> FileIndex:
        self.state.set(is_loading=True, error=None)
        try:
            data = await self.gateway.execute(endpoint["path"], method=endpoint["method"], params=params or {})
            if not isinstance(data, dict):
                raise ApiError(200, f"Unexpected listing response: {data!r}", payload=data, path=endpoint["path"])

            files = [FileItem.from_api(row) for row in data.get("files") or []]
            crumbs = [BreadcrumbItem.from_api(row) for row in data.get("breadcrumbs") or []]
            if endpoint["path"] == FILES["trash"]["path"]:
                crumbs = normalize_trash_breadcrumbs(crumbs)
            if custom_breadcrumbs is not None:
                crumbs = _copy_crumbs(custom_breadcrumbs)
            parent_id = data.get("parentID")
            parent_id = str(parent_id) if parent_id else None

            self.state.set(files=files, current_parent_id=parent_id, breadcrumbs=crumbs)
            self.logger.debug("Fetched %d file(s) from %s", len(files), endpoint["path"])
            return FileIndex(files=list(files), parent_id=parent_id, breadcrumbs=list(crumbs))
        except Exception as exc:
            if isinstance(exc, ApiError):
                message = exc.message or GENERIC_ERROR
                status = exc.status_code
            else:
                message = str(exc) or GENERIC_ERROR
                status = None
            self.state.set(error=message)
            self.logger.warning("Fetching %s failed: %s", endpoint["path"], message)
            if status in (403, 404):
                self.router.push(HOME_PATH)
            raise
        finally:
            self.state.set(is_loading=False)

    async def fetch_files(self, parent_id: Optional[str] = None) -> FileIndex:
        return await self._execute_fetch(FILES["list"], {"parentID": parent_id} if parent_id else {})

    async def fetch_recent(self) -> FileIndex:
        return await self._execute_fetch(FILES["recent"], custom_breadcrumbs=[RECENT_CRUMB])

    async def fetch_favorites(self) -> FileIndex:
        return await self._execute_fetch(FILES["favorites"], custom_breadcrumbs=[FAVORITES_CRUMB])

    async def fetch_shared(self) -> FileIndex:
        return await self._execute_fetch(FILES["shared"], custom_breadcrumbs=[SHARED_CRUMB])

    async def fetch_trash(self, parent_id: Optional[str] = None) -> FileIndex:
        return await self._execute_fetch(FILES["trash"], {"parentID": parent_id} if parent_id else {})

    # cache patches

    def _update_file(self, updated: FileItem) -> None:
        files = list(self.state.files)
        for index, item in enumerate(files):
            if item.id == updated.id:
                files[index] = updated
                self.state.set(files=files)
                return

    def _remove_file(self, file_id: str) -> None:
        files = [item for item in self.state.files if item.id != file_id]
        if len(files) != len(self.state.files):
            self.state.set(files=files)

    def _add_file(self, item: FileItem) -> None:
        self.state.set(files=self.state.files + [item])

    async def _call(self, endpoint: Dict[str, str], file_id: Optional[str] = None, **options: Any) -> Any:
        path = endpoint["path"].format(id=file_id) if file_id is not None else endpoint["path"]
        return await self.gateway.execute(path, method=endpoint["method"], **options)

    async def _call_for_file(self, endpoint: Dict[str, str], file_id: Optional[str] = None, **options: Any) -> FileItem:
        data = await self._call(endpoint, file_id, **options)
        if not isinstance(data, dict):
            raise ApiError(200, f"Unexpected file response: {data!r}", payload=data, path=endpoint["path"])
        return FileItem.from_api(data)

    async def _after_permanent_delete(self) -> None:
        if self.refresh_quota is None:
            return
        try:
            await self.refresh_quota()
        except Exception as exc:
            self.logger.warning("Quota refresh after deletion failed: %s", exc)

    # mutations

    async def create_folder(self, name: str, parent_id: Any = CURRENT_FOLDER) -> FileItem:
        if parent_id is CURRENT_FOLDER:
            parent_id = self.state.current_parent_id
        item = await self._call_for_file(FILES["create_directory"], json={"name": name, "parentID": parent_id})
        self._add_file(item)
        return item

    async def delete_file(self, file_id: str) -> None:
        await self._call(FILES["delete"], file_id)
        self._remove_file(file_id)

    async def delete_files(self, file_ids: Sequence[str]) -> None:
        await asyncio.gather(*(self.delete_file(file_id) for file_id in file_ids))

    async def delete_file_permanently(self, file_id: str, refresh_quota: bool = True) -> None:
        await self._call(FILES["permanent_delete"], file_id)
        self._remove_file(file_id)
        if refresh_quota:
            await self._after_permanent_delete()

    async def delete_files_permanently(self, file_ids: Sequence[str]) -> None:
        await asyncio.gather(*(self.delete_file_permanently(file_id, refresh_quota=False) for file_id in file_ids))
        await self._after_permanent_delete()

    async def move_file(self, file_id: str, parent_id: Optional[str]) -> FileItem:
        item = await self._call_for_file(FILES["move"], json={"fileID": file_id, "parentID": parent_id})
        self._remove_file(file_id)
        return item

    async def rename_file(self, file_id: str, name: str) -> FileItem:
        item = await self._call_for_file(FILES["rename"], file_id, json={"name": name})
        self._update_file(item)
        return item

    async def restore_file(self, file_id: str) -> FileItem:
        item = await self._call_for_file(FILES["restore"], file_id)
        self._remove_file(file_id)
        return item

    async def toggle_favorite(self, file_id: str) -> FileItem:
        item = await self._call_for_file(FILES["favorite"], file_id)
        self._update_file(item)
        return item

    def delete_description(self, items: Sequence[FileItem], is_trash: bool) -> str:
        return delete_description(items, is_trash, self.translator)
