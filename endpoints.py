# Backend routes for the fynncloud API; update if the server changes them.

BASE_URL = "http://localhost:8080"

AUTH = {
    "refresh": {
        "method": "POST",
        "path": "/api/auth/refresh",
    },
}

QUOTA = {
    "get": {
        "method": "GET",
        "path": "/api/quota",
    }
}

FILES = {
    "list": {
        "method": "GET",
        "path": "/api/files",
    },
    "recent": {
        "method": "GET",
        "path": "/api/files/recent",
    },
    "favorites": {
        "method": "GET",
        "path": "/api/files/favorites",
    },
    "shared": {
        "method": "GET",
        "path": "/api/files/shared",
    },
    "trash": {
        "method": "GET",
        "path": "/api/files/trash",
    },
    "create_directory": {
        "method": "POST",
        "path": "/api/files/create-directory",
    },
    "delete": {
        "method": "DELETE",
        "path": "/api/files/{id}",
    },
    "permanent_delete": {
        "method": "DELETE",
        "path": "/api/files/{id}/permanent-delete",
    },
    "move": {
        "method": "POST",
        "path": "/api/files/move-file",
    },
    "rename": {
        "method": "PATCH",
        "path": "/api/files/{id}",
    },
    "restore": {
        "method": "POST",
        "path": "/api/files/{id}/restore",
    },
    "favorite": {
        "method": "POST",
        "path": "/api/files/{id}/favorite",
    },
}
