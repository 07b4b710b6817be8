"""Decide whether an editor change should ask the server for signature help."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

_DELETE_ORIGINS = {"+delete", "delete", "cut"}


@dataclass(frozen=True)
class EditorChange:
    inserted: str = ""
    removed: str = ""
    origin: str = "+input"


def last_character(change: EditorChange) -> str:
    if str(change.origin or "").strip().lower() in _DELETE_ORIGINS:
        text = change.removed
    else:
        text = change.inserted
    return text[-1] if text else ""


def should_request(
    last_typed_or_deleted: str,
    popup_shown: bool,
    trigger_characters: Collection[str],
) -> bool:
    # an open popup stays live without a trigger character
    if popup_shown:
        return True
    return bool(last_typed_or_deleted) and last_typed_or_deleted in trigger_characters
