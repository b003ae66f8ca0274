from .app import AppState, build_app
from .client import CloudClient
from .errors import ApiError
from .files import FileSync
from .gateway import RefreshCoordinator, RequestGateway
from .models import BreadcrumbItem, FileIndex, FileItem, Quota
from .quota import QuotaStore
from .state import FilesState, Router, SessionState

__version__ = "0.1.0"
