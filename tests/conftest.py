from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication

from signature_assist.lsp.transport import SignatureHelpCapabilities
from signature_assist.lsp.types import EditorPosition, RootPosition, VirtualPosition


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


class FakeEditor:
    def __init__(self, content: str = "", cursor: RootPosition | None = None) -> None:
        self.content = content
        self.cursor = cursor or RootPosition(0, 0)
        self.focused = True
        self.uri = "file:///tmp/example.py"
        self.language = "python"
        self.line_offset = 0

    def cursor_position(self) -> RootPosition:
        return self.cursor

    def has_focus(self) -> bool:
        return self.focused

    def text(self) -> str:
        return self.content

    def document_uri(self) -> str:
        return self.uri

    def root_to_editor(self, position: RootPosition) -> EditorPosition:
        return EditorPosition(position.line - self.line_offset, position.character)

    def editor_to_root(self, position: EditorPosition) -> RootPosition:
        return RootPosition(position.line + self.line_offset, position.character)

    def root_to_virtual(self, position: RootPosition) -> VirtualPosition:
        return VirtualPosition(position.line, position.character)

    def language_at(self, _position: EditorPosition) -> str:
        return self.language


class FakePopup:
    def __init__(self) -> None:
        self.session_id: str | None = None
        self.anchor: EditorPosition | None = None
        self.content = ""
        self.show_calls: list[dict] = []
        self.hide_calls = 0

    def show_or_create(self, *, content, anchor_position, session_id, class_name, placement_hints) -> None:
        self.session_id = session_id
        self.anchor = anchor_position
        self.content = content
        self.show_calls.append(
            {
                "content": content,
                "anchor_position": anchor_position,
                "session_id": session_id,
                "class_name": class_name,
                "placement_hints": placement_hints,
            }
        )

    def hide(self) -> None:
        self.session_id = None
        self.hide_calls += 1

    def is_shown(self, session_id: str) -> bool:
        return self.session_id is not None and self.session_id == session_id

    def current_anchor_position(self) -> EditorPosition | None:
        return self.anchor if self.session_id is not None else None


class FakeTransport:
    def __init__(self, trigger_characters=("(", ","), *, ready: bool = True, supported: bool = True) -> None:
        self.trigger_characters = tuple(trigger_characters)
        self.ready = ready
        self.supported = supported
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None

    @property
    def capabilities(self) -> SignatureHelpCapabilities:
        return SignatureHelpCapabilities(supported=self.supported, trigger_characters=self.trigger_characters)

    def is_ready(self) -> bool:
        return self.ready

    def request_signature_help(self, position, document_uri, *, on_result, on_error) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(
            {"position": position, "uri": document_uri, "on_result": on_result, "on_error": on_error}
        )
        return len(self.calls)

    def settle(self, index: int, result) -> None:
        self.calls[index]["on_result"](result)

    def fail(self, index: int, error) -> None:
        self.calls[index]["on_error"](error)


class FakeJsonRpcClient:
    def __init__(self, server_capabilities: dict | None = None) -> None:
        self.server_capabilities = server_capabilities or {}
        self.ready = True
        self.requests: list[dict] = []

    def is_ready(self) -> bool:
        return self.ready

    def request(self, method, params=None, *, on_result=None, on_error=None) -> int:
        self.requests.append({"method": method, "params": params, "on_result": on_result, "on_error": on_error})
        return len(self.requests)


def recording_highlighter(calls: list | None = None):
    def _highlight(source: str, variable: str, language: str, *, span=None) -> str:
        if calls is not None:
            calls.append((source, variable, language))
        return f"<hl lang={language}>{source}|{variable}</hl>"

    return _highlight


@pytest.fixture
def editor():
    return FakeEditor()


@pytest.fixture
def popup():
    return FakePopup()


@pytest.fixture
def transport():
    return FakeTransport()
