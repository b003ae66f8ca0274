from typing import Any, Dict, Optional, Sequence

from .models import FileItem

DEFAULT_MESSAGES: Dict[str, str] = {
    "files.actions.delete.descriptionSingle": "Move \"{name}\" to the trash?",
    "files.actions.delete.descriptionMultiple": "Move {count} items to the trash?",
    "files.actions.deletePermanent.descriptionSingle": "Permanently delete \"{name}\"? This cannot be undone.",
    "files.actions.deletePermanent.descriptionMultiple": "Permanently delete {count} items? This cannot be undone.",
    "navigation.recentFiles": "Recent",
    "navigation.favoriteFiles": "Favorites",
    "navigation.sharedFiles": "Shared",
    "navigation.trash": "Trash",
}


class Translator:
    """Message lookup with ``{param}`` interpolation; unknown keys come back as-is."""

    def __init__(self, messages: Optional[Dict[str, str]] = None):
        self.messages = dict(DEFAULT_MESSAGES)
        if messages:
            self.messages.update(messages)

    def t(self, key: str, **params: Any) -> str:
        template = self.messages.get(key)
        if template is None:
            return key
        try:
            return template.format(**params)
        except (KeyError, IndexError):
            return template


def delete_description(items: Sequence[FileItem], is_trash: bool, translator: Translator) -> str:
    count = len(items)
    action = "deletePermanent" if is_trash else "delete"
    if count == 1:
        return translator.t(f"files.actions.{action}.descriptionSingle", name=items[0].name)
    return translator.t(f"files.actions.{action}.descriptionMultiple", count=count)
