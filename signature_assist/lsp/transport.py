"""Bridge between a JSON-RPC LSP client and the signature help feature."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from .types import ResponseSignal, SignatureResponse, VirtualPosition, parse_signature_help

logger = logging.getLogger(__name__)

SignatureResult = SignatureResponse | ResponseSignal
ResultCallback = Callable[[SignatureResult], None]
ErrorCallback = Callable[[object], None]

SIGNATURE_HELP_METHOD = "textDocument/signatureHelp"

SIGNATURE_HELP_CLIENT_CAPABILITIES: dict[str, Any] = {
    "textDocument": {
        "signatureHelp": {
            "dynamicRegistration": True,
            "signatureInformation": {
                "documentationFormat": ["markdown", "plaintext"],
                "parameterInformation": {"labelOffsetSupport": True},
                "activeParameterSupport": True,
            },
        }
    }
}


class JsonRpcClient(Protocol):
    server_capabilities: dict[str, Any]

    def is_ready(self) -> bool:
        ...

    def request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        on_result: Callable[[object], None] | None = None,
        on_error: Callable[[object], None] | None = None,
    ) -> int:
        ...


@dataclass(frozen=True)
class SignatureHelpCapabilities:
    supported: bool = False
    trigger_characters: tuple[str, ...] = ()

    @classmethod
    def from_server_capabilities(cls, caps: object) -> SignatureHelpCapabilities:
        if not isinstance(caps, dict):
            return cls()
        provider = caps.get("signatureHelpProvider")
        if not provider:
            return cls()
        if not isinstance(provider, dict):
            return cls(supported=True)
        return cls(
            supported=True,
            trigger_characters=_characters(provider.get("triggerCharacters")),
        )


def _characters(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[str] = []
    for item in raw:
        text = str(item or "")
        if text and text not in out:
            out.append(text)
    return tuple(out)


class LspSignatureTransport:
    """Sends ``textDocument/signatureHelp`` requests through a JSON-RPC client."""

    def __init__(self, client: JsonRpcClient) -> None:
        self._client = client

    @property
    def capabilities(self) -> SignatureHelpCapabilities:
        return SignatureHelpCapabilities.from_server_capabilities(
            getattr(self._client, "server_capabilities", None)
        )

    def is_ready(self) -> bool:
        return bool(self._client.is_ready())

    def request_signature_help(
        self,
        position: VirtualPosition,
        document_uri: str,
        *,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> int:
        params = {
            "textDocument": {"uri": str(document_uri or "")},
            "position": {"line": max(0, int(position.line)), "character": max(0, int(position.character))},
        }
        return self._client.request(
            SIGNATURE_HELP_METHOD,
            params,
            on_result=lambda result: on_result(self._convert_result(result)),
            on_error=on_error,
        )

    @staticmethod
    def _convert_result(result: object) -> SignatureResult:
        # null means close, a missing/unusable payload means no update
        if result is None:
            return ResponseSignal.CLOSE
        response = parse_signature_help(result)
        if response is None:
            logger.warning("Unexpected signature help result: %r", result)
            return ResponseSignal.NO_UPDATE
        return response
