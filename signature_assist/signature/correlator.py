"""Correlate asynchronous signature help responses with the live editor state.

Only one request session is authoritative per editor. Issuing a new request
supersedes the previous session without cancelling the transport call; a late
response for a superseded session is simply ignored. Whether an accepted
response is still relevant is decided from the cursor and focus state read when
the response arrives, not when the request was sent:

* cursor on another line than at request time: stale;
* cursor before the request character on the same line: stale;
* editor pane without focus: stale;
* otherwise the response is shown (or the visible popup updated).
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection
from dataclasses import dataclass, replace
from typing import Callable, Protocol

from signature_assist.lsp.transport import ErrorCallback, ResultCallback, SignatureHelpCapabilities, SignatureResult
from signature_assist.lsp.types import (
    EditorPosition,
    ResponseSignal,
    RootPosition,
    VirtualPosition,
    offset_at_position,
    position_at_offset,
)

from .markdown import DEFAULT_MAX_LINES, CodeHighlighter, format_signature_help

logger = logging.getLogger(__name__)

SIGNATURE_POPUP_ID = "signature"
SIGNATURE_POPUP_CLASS = "lsp-signature-help"


class EditorAccessor(Protocol):
    def cursor_position(self) -> RootPosition:
        ...

    def has_focus(self) -> bool:
        ...

    def text(self) -> str:
        ...

    def document_uri(self) -> str:
        ...

    def root_to_editor(self, position: RootPosition) -> EditorPosition:
        ...

    def editor_to_root(self, position: EditorPosition) -> RootPosition:
        ...

    def root_to_virtual(self, position: RootPosition) -> VirtualPosition:
        ...

    def language_at(self, position: EditorPosition) -> str:
        ...


class SignatureTransport(Protocol):
    @property
    def capabilities(self) -> SignatureHelpCapabilities:
        ...

    def is_ready(self) -> bool:
        ...

    def request_signature_help(
        self,
        position: VirtualPosition,
        document_uri: str,
        *,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> int:
        ...


class SignaturePopup(Protocol):
    def show_or_create(
        self,
        *,
        content: str,
        anchor_position: EditorPosition,
        session_id: str,
        class_name: str,
        placement_hints: dict,
    ) -> None:
        ...

    def hide(self) -> None:
        ...

    def is_shown(self, session_id: str) -> bool:
        ...

    def current_anchor_position(self) -> EditorPosition | None:
        ...


class CorrelatorState(enum.Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class DispositionAction(enum.Enum):
    SHOW = "show"
    UPDATE = "update"
    HIDE = "hide"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Disposition:
    action: DispositionAction
    content: str = ""
    anchor: EditorPosition | None = None
    reason: str = ""


@dataclass(frozen=True)
class RequestSession:
    token: int
    requested_position: RootPosition
    display_position: EditorPosition | None = None
    request_id: int = 0


SessionResultCallback = Callable[[RequestSession, SignatureResult], None]
SessionErrorCallback = Callable[[RequestSession, object], None]


class RequestCorrelator:
    def __init__(
        self,
        editor: EditorAccessor,
        transport: SignatureTransport,
        popup: SignaturePopup,
        *,
        highlighter: CodeHighlighter,
        max_lines: int = DEFAULT_MAX_LINES,
        log: logging.Logger | None = None,
    ) -> None:
        self._editor = editor
        self._transport = transport
        self._popup = popup
        self._highlighter = highlighter
        self.max_lines = max_lines
        self._log = log or logger
        self._next_token = 0
        self._session: RequestSession | None = None

    @property
    def state(self) -> CorrelatorState:
        if self._session is None:
            return CorrelatorState.IDLE
        return CorrelatorState.AWAITING_RESPONSE

    @property
    def session(self) -> RequestSession | None:
        return self._session

    def is_superseded(self, session: RequestSession) -> bool:
        return self._session is None or self._session.token != session.token

    def issue_request(
        self,
        root_position: RootPosition,
        display_position: EditorPosition | None = None,
        *,
        on_result: SessionResultCallback,
        on_error: SessionErrorCallback,
    ) -> RequestSession | None:
        self._next_token += 1
        session = RequestSession(
            token=self._next_token,
            requested_position=root_position,
            display_position=display_position,
        )
        previous = self._session
        # registered before sending: transports may settle synchronously
        self._session = session

        try:
            request_id = self._transport.request_signature_help(
                self._editor.root_to_virtual(root_position),
                self._editor.document_uri(),
                on_result=lambda result: on_result(session, result),
                on_error=lambda error: on_error(session, error),
            )
        except Exception as exc:
            self._log.warning("Signature help request failed to send: %s", exc)
            if self._session is session:
                self._session = previous
            return None

        if self._session is not session:
            # already settled or superseded from within the transport call
            return replace(session, request_id=int(request_id or 0))
        self._session = replace(session, request_id=int(request_id or 0))
        return self._session

    def on_failure(self, session: RequestSession, error: object) -> Disposition:
        if not self.is_superseded(session):
            self._session = None
        self._log.warning("Signature help request failed: %s", error)
        return Disposition(DispositionAction.IGNORE, reason="transport_failure")

    def on_response(self, session: RequestSession, response: SignatureResult) -> Disposition:
        self._log.debug("Signature received: %r", response)
        if self.is_superseded(session):
            self._log.debug("Ignoring signature response: request %s was superseded", session.token)
            return Disposition(DispositionAction.IGNORE, reason="superseded")
        self._session = None

        if response is ResponseSignal.CLOSE:
            return self._hide_if_shown("closed_by_server")
        if response is ResponseSignal.NO_UPDATE:
            return Disposition(DispositionAction.IGNORE, reason="no_update")
        if not response.signatures:
            self._log.debug("Ignoring signature response: response empty")
            return self._hide_if_shown("empty")

        root_position = self._editor.cursor_position()
        requested = session.requested_position
        if root_position.line != requested.line or root_position.character < requested.character:
            self._log.debug("Ignoring signature response: cursor has receded or changed line")
            return self._hide_if_shown("cursor_moved")

        if not self._editor.has_focus():
            self._log.debug("Ignoring signature response: the corresponding editor lost focus")
            return self._hide_if_shown("focus_lost")

        editor_position = self._editor.root_to_editor(root_position)
        language = self._editor.language_at(editor_position)
        content = format_signature_help(
            response,
            language,
            highlighter=self._highlighter,
            max_lines=self.max_lines,
            log=self._log,
        )
        anchor = session.display_position or self._anchor_for(editor_position)
        self._log.debug("Signature will be shown at %s (%s)", anchor, language)
        action = DispositionAction.UPDATE if self._popup_shown() else DispositionAction.SHOW
        return Disposition(action, content=content, anchor=anchor, reason="accepted")

    def _popup_shown(self) -> bool:
        return bool(self._popup.is_shown(SIGNATURE_POPUP_ID))

    def _hide_if_shown(self, reason: str) -> Disposition:
        if self._popup_shown():
            return Disposition(DispositionAction.HIDE, reason=reason)
        return Disposition(DispositionAction.IGNORE, reason=reason)

    def _anchor_for(self, editor_position: EditorPosition) -> EditorPosition:
        return find_anchor(
            self._editor.text(),
            editor_position,
            self._transport.capabilities.trigger_characters,
        )


def find_anchor(content: str, cursor: EditorPosition, trigger_characters: Collection[str]) -> EditorPosition:
    """Position of the last trigger character before ``cursor``, else ``cursor``."""
    lines = content.split("\n")
    subset = content[: offset_at_position(cursor, lines)]
    last_offset = max((subset.rfind(ch) for ch in trigger_characters if ch), default=-1)
    if last_offset == -1:
        return cursor
    line, character = position_at_offset(last_offset, lines)
    return EditorPosition(line, character)
