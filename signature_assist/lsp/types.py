"""Small LSP dataclasses/helpers for positions and signature help payloads."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class RootPosition(Position):
    """Position in the logical document as the user sees it."""


@dataclass(frozen=True)
class EditorPosition(Position):
    """Position inside one physical editor pane."""


@dataclass(frozen=True)
class VirtualPosition(Position):
    """Position in the document the language server knows about."""


@dataclass(frozen=True)
class PlainText:
    value: str


@dataclass(frozen=True)
class Markdown:
    value: str


Documentation = PlainText | Markdown


@dataclass(frozen=True)
class LiteralLabel:
    text: str

    def substring_of(self, _signature_label: str) -> str:
        return self.text

    def span_in(self, _signature_label: str) -> tuple[int, int] | None:
        return None


@dataclass(frozen=True)
class OffsetLabel:
    start: int
    end: int

    def substring_of(self, signature_label: str) -> str:
        return signature_label[self.start:self.end]

    def span_in(self, signature_label: str) -> tuple[int, int] | None:
        size = len(signature_label)
        start = min(max(self.start, 0), size)
        end = min(max(self.end, start), size)
        return start, end


ParameterLabel = LiteralLabel | OffsetLabel


@dataclass(frozen=True)
class ParameterDescription:
    label: ParameterLabel
    documentation: Documentation | None = None


@dataclass(frozen=True)
class SignatureDescription:
    label: str
    parameters: tuple[ParameterDescription, ...] = ()
    documentation: Documentation | None = None
    active_parameter: int | None = None


@dataclass(frozen=True)
class SignatureResponse:
    signatures: tuple[SignatureDescription, ...] = ()
    active_signature: int | None = None
    active_parameter: int | None = None


class ResponseSignal(enum.Enum):
    """Non-payload outcomes of a signature help request."""

    CLOSE = "close"
    NO_UPDATE = "no_update"


def parse_documentation(raw: object, *, log: logging.Logger | None = None) -> Documentation | None:
    log = log or logger
    if raw is None:
        return None
    if isinstance(raw, str):
        return PlainText(raw) if raw else None
    if not isinstance(raw, dict):
        log.warning("Ignoring documentation of unexpected type: %r", raw)
        return None
    value = str(raw.get("value") or "")
    if not value:
        return None
    kind = str(raw.get("kind") or "").strip().lower()
    if kind == "plaintext":
        return PlainText(value)
    if kind != "markdown":
        log.warning("Unknown MarkupContent kind: %r", raw.get("kind"))
    return Markdown(value)


def parse_parameter_label(raw: object) -> ParameterLabel | None:
    if isinstance(raw, str):
        return LiteralLabel(raw)
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        try:
            start, end = int(raw[0]), int(raw[1])
        except (TypeError, ValueError):
            return None
        if 0 <= start <= end:
            return OffsetLabel(start, end)
    return None


def _optional_index(raw: object) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def parse_signature(raw: object, *, log: logging.Logger | None = None) -> SignatureDescription | None:
    log = log or logger
    if not isinstance(raw, dict):
        return None
    label = str(raw.get("label") or "")
    parameters: list[ParameterDescription] = []
    raw_parameters = raw.get("parameters")
    if isinstance(raw_parameters, list):
        for item in raw_parameters:
            if not isinstance(item, dict):
                continue
            param_label = parse_parameter_label(item.get("label"))
            if param_label is None:
                log.warning("Dropping parameter with malformed label: %r", item.get("label"))
                continue
            parameters.append(
                ParameterDescription(
                    label=param_label,
                    documentation=parse_documentation(item.get("documentation"), log=log),
                )
            )
    return SignatureDescription(
        label=label,
        parameters=tuple(parameters),
        documentation=parse_documentation(raw.get("documentation"), log=log),
        active_parameter=_optional_index(raw.get("activeParameter")),
    )


def parse_signature_help(payload: Any, *, log: logging.Logger | None = None) -> SignatureResponse | None:
    """Convert a raw ``textDocument/signatureHelp`` result into a ``SignatureResponse``.

    Returns ``None`` when the payload is not a signature help object at all.
    A mapping without a ``signatures`` list carries no signatures.
    """
    if not isinstance(payload, dict):
        return None
    raw_signatures = payload.get("signatures")
    if not isinstance(raw_signatures, list):
        raw_signatures = []
    signatures = []
    for raw in raw_signatures:
        sig = parse_signature(raw, log=log)
        if sig is not None:
            signatures.append(sig)
    return SignatureResponse(
        signatures=tuple(signatures),
        active_signature=_optional_index(payload.get("activeSignature")),
        active_parameter=_optional_index(payload.get("activeParameter")),
    )


def offset_at_position(position: Position, lines: list[str]) -> int:
    line = max(0, min(int(position.line), len(lines) - 1)) if lines else 0
    offset = sum(len(text) + 1 for text in lines[:line])
    if lines:
        offset += max(0, min(int(position.character), len(lines[line])))
    return offset


def position_at_offset(offset: int, lines: list[str]) -> tuple[int, int]:
    remaining = max(0, int(offset))
    for line, text in enumerate(lines):
        if remaining <= len(text):
            return line, remaining
        remaining -= len(text) + 1
    if not lines:
        return 0, 0
    return len(lines) - 1, len(lines[-1])

