"""Qt-aware glue between editor events, the LSP transport and the signature popup."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from signature_assist.lsp.transport import SignatureResult
from signature_assist.lsp.types import EditorPosition, RootPosition
from signature_assist.settings import SignatureSettings, normalize_signature_settings

from .correlator import (
    SIGNATURE_POPUP_CLASS,
    SIGNATURE_POPUP_ID,
    Disposition,
    DispositionAction,
    EditorAccessor,
    RequestCorrelator,
    RequestSession,
    SignaturePopup,
    SignatureTransport,
)
from .highlight import highlight_parameter_html
from .markdown import CodeHighlighter
from .triggers import EditorChange, last_character, should_request

logger = logging.getLogger(__name__)

_PLACEMENT_HINTS = {
    "privilege": "forceAbove",
    # anchor follows the display position
    "alignment": None,
    "hide_on_key_press": False,
}


class AssistanceController(QObject):
    signatureShown = Signal(object)
    signatureHidden = Signal()
    statusMessage = Signal(str)

    def __init__(
        self,
        editor: EditorAccessor,
        transport: SignatureTransport,
        popup: SignaturePopup,
        *,
        settings: object = None,
        highlighter: CodeHighlighter = highlight_parameter_html,
        log: logging.Logger | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._editor = editor
        self._transport = transport
        self._popup = popup
        self._log = log or logger
        self._settings = normalize_signature_settings(settings, log=self._log)
        self.correlator = RequestCorrelator(
            editor,
            transport,
            popup,
            highlighter=highlighter,
            max_lines=self._settings.max_lines,
            log=self._log,
        )

    @property
    def settings(self) -> SignatureSettings:
        return self._settings

    def update_settings(self, raw: object) -> None:
        self._settings = normalize_signature_settings(raw, log=self._log)
        self.correlator.max_lines = self._settings.max_lines
        if not self._settings.enabled:
            self.hide()

    def is_signature_shown(self) -> bool:
        return bool(self._popup.is_shown(SIGNATURE_POPUP_ID))

    def hide(self) -> None:
        if not self.is_signature_shown():
            return
        self._popup.hide()
        self.signatureHidden.emit()

    def on_change(self, change: EditorChange) -> RequestSession | None:
        last_char = last_character(change)
        shown = self.is_signature_shown()
        previous_position: EditorPosition | None = None

        if shown:
            previous_position = self._popup.current_anchor_position()
            if last_char and last_char in self._settings.close_characters:
                # no early return: the same character may re-trigger
                self.hide()

        trigger_characters = self._transport.capabilities.trigger_characters
        if not should_request(last_char, shown, trigger_characters):
            return None
        return self.request_signature(self._editor.cursor_position(), previous_position)

    def on_cursor_activity(self) -> RequestSession | None:
        if not self.is_signature_shown():
            return None
        root_position = self._editor.cursor_position()
        initial_position = self._popup.current_anchor_position()
        if initial_position is not None:
            editor_position = self._editor.root_to_editor(root_position)
            if (
                editor_position.line == initial_position.line
                and editor_position.character < initial_position.character
            ):
                self.hide()
                return None
        return self.request_signature(root_position, initial_position)

    def on_focus_in(self) -> RequestSession | None:
        return self.on_cursor_activity()

    def on_focus_out(self, moved_into_popup: bool = False) -> None:
        # selecting/copying from the popup keeps it open
        if moved_into_popup:
            return
        self.hide()

    def request_signature(
        self,
        root_position: RootPosition,
        display_position: EditorPosition | None = None,
    ) -> RequestSession | None:
        if not self._settings.enabled:
            return None
        if not (self._transport.is_ready() and self._transport.capabilities.supported):
            return None
        return self.correlator.issue_request(
            root_position,
            display_position,
            on_result=self._on_result,
            on_error=self._on_error,
        )

    def _on_result(self, session: RequestSession, result: SignatureResult) -> None:
        try:
            disposition = self.correlator.on_response(session, result)
            self._apply(disposition)
        except Exception:
            self._log.exception("Failed to handle signature help response")

    def _on_error(self, session: RequestSession, error: object) -> None:
        self.correlator.on_failure(session, error)
        self.statusMessage.emit(f"Signature help failed: {error}")

    def _apply(self, disposition: Disposition) -> None:
        action = disposition.action
        if action is DispositionAction.HIDE:
            self.hide()
            return
        if action not in {DispositionAction.SHOW, DispositionAction.UPDATE}:
            return
        self._popup.show_or_create(
            content=disposition.content,
            anchor_position=disposition.anchor,
            session_id=SIGNATURE_POPUP_ID,
            class_name=SIGNATURE_POPUP_CLASS,
            placement_hints=dict(_PLACEMENT_HINTS),
        )
        self.signatureShown.emit(
            {
                "content": disposition.content,
                "anchor": disposition.anchor,
                "updated": action is DispositionAction.UPDATE,
            }
        )
