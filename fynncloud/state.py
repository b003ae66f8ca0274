from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .models import BreadcrumbItem, FileItem

Listener = Callable[[Dict[str, Any]], None]


@dataclass
class Observable:
    """State container whose changes are pushed to explicit subscribers.

    Listeners get a dict of the fields that changed in one ``set`` call.
    """

    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False, compare=False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, **changes: Any) -> None:
        for name, value in changes.items():
            if not hasattr(self, name) or name.startswith("_"):
                raise AttributeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(dict(changes))


@dataclass
class SessionState(Observable):
    user: Optional[Dict[str, Any]] = None

    def clear(self) -> None:
        self.set(user=None)


@dataclass
class Router(Observable):
    """Records where the application was asked to go; rendering is someone else's job."""

    location: str = "/"
    history: List[str] = field(default_factory=list)

    def push(self, path: str) -> None:
        self.set(location=path, history=self.history + [path])


@dataclass
class FilesState(Observable):
    files: List[FileItem] = field(default_factory=list)
    current_parent_id: Optional[str] = None
    breadcrumbs: List[BreadcrumbItem] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None

    def find(self, file_id: str) -> Optional[FileItem]:
        for item in self.files:
            if item.id == file_id:
                return item
        return None
