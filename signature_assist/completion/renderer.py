"""Completion list hooks: label extra text and item visibility/activation events.

How visibility and activation are detected is up to the host widget; it only
reports them through ``notify_visible`` and ``notify_active_state``.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any

from PySide6.QtCore import QObject, Signal

from signature_assist.settings import CompletionSettings, normalize_completion_settings

logger = logging.getLogger(__name__)


def _item_type(item: dict[str, Any]) -> str:
    return str(item.get("kind") or item.get("type") or "").lower()


def _item_source(item: dict[str, Any]) -> str:
    source = item.get("source")
    if isinstance(source, dict):
        return str(source.get("name") or "")
    return str(source or "")


class CompletionItemObserver(QObject):
    itemShown = Signal(object)
    activeChanged = Signal(object)

    def __init__(
        self,
        settings: object = None,
        *,
        log: logging.Logger | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._log = log or logger
        self._settings = normalize_completion_settings(settings, log=self._log)
        self._element_to_item: weakref.WeakKeyDictionary[object, dict[str, Any]] = weakref.WeakKeyDictionary()
        self._was_activated: weakref.WeakKeyDictionary[object, bool] = weakref.WeakKeyDictionary()

    @property
    def settings(self) -> CompletionSettings:
        return self._settings

    def update_settings(self, raw: object) -> None:
        self._settings = normalize_completion_settings(raw, log=self._log)

    def observe(self, element: object, item: dict[str, Any]) -> None:
        self._element_to_item[element] = item

    def item_for(self, element: object) -> dict[str, Any] | None:
        return self._element_to_item.get(element)

    def notify_visible(self, element: object) -> None:
        item = self._element_to_item.get(element)
        if item is None:
            return
        self.itemShown.emit({"item": item, "element": element})

    def notify_active_state(self, element: object, active: bool) -> None:
        item = self._element_to_item.get(element)
        if item is None:
            return
        if not active:
            self._was_activated[element] = False
            return
        if self._was_activated.get(element, False):
            return
        self._was_activated[element] = True
        self.activeChanged.emit({"item": item, "element": element})

    def extra_info(self, item: dict[str, Any] | None) -> str:
        item = item or {}
        label_extra = self._settings.label_extra
        if label_extra == "detail":
            return str(item.get("detail") or "")
        if label_extra == "type":
            return _item_type(item)
        if label_extra == "source":
            return _item_source(item)
        if label_extra == "auto":
            for candidate in (str(item.get("detail") or ""), _item_type(item), _item_source(item)):
                if candidate:
                    return candidate
        return ""
