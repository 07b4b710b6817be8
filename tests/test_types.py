from __future__ import annotations

import logging

from signature_assist.lsp.types import (
    EditorPosition,
    LiteralLabel,
    Markdown,
    OffsetLabel,
    PlainText,
    RootPosition,
    SignatureResponse,
    offset_at_position,
    parse_documentation,
    parse_parameter_label,
    parse_signature_help,
    position_at_offset,
)


def test_position_spaces_are_not_interchangeable():
    assert RootPosition(1, 2) != EditorPosition(1, 2)
    assert RootPosition(1, 2) == RootPosition(1, 2)


def test_documentation_variants():
    assert parse_documentation("text") == PlainText("text")
    assert parse_documentation({"kind": "plaintext", "value": "p"}) == PlainText("p")
    assert parse_documentation({"kind": "markdown", "value": "*m*"}) == Markdown("*m*")
    assert parse_documentation(None) is None
    assert parse_documentation("") is None


def test_unknown_markup_kind_is_kept_verbatim(caplog):
    with caplog.at_level(logging.WARNING):
        doc = parse_documentation({"kind": "asciidoc", "value": "*x*"})

    assert doc == Markdown("*x*")
    assert "Unknown MarkupContent kind" in caplog.text


def test_parameter_label_variants():
    assert parse_parameter_label("a") == LiteralLabel("a")
    assert parse_parameter_label([4, 5]) == OffsetLabel(4, 5)
    assert parse_parameter_label([5, 4]) is None
    assert parse_parameter_label({"bad": 1}) is None
    assert OffsetLabel(4, 5).substring_of("foo(a, b)") == "a"


def test_parse_signature_help_payload():
    payload = {
        "signatures": [
            {
                "label": "foo(a, b)",
                "documentation": {"kind": "markdown", "value": "Docs"},
                "parameters": [
                    {"label": [4, 5], "documentation": "first"},
                    {"label": "b"},
                ],
                "activeParameter": 1,
            }
        ],
        "activeSignature": 0,
    }
    response = parse_signature_help(payload)

    assert response is not None
    assert response.active_signature == 0
    assert response.active_parameter is None
    sig = response.signatures[0]
    assert sig.label == "foo(a, b)"
    assert sig.documentation == Markdown("Docs")
    assert sig.active_parameter == 1
    assert sig.parameters[0].label == OffsetLabel(4, 5)
    assert sig.parameters[0].documentation == PlainText("first")
    assert sig.parameters[1].label == LiteralLabel("b")


def test_parse_rejects_non_signature_payloads():
    assert parse_signature_help(None) is None
    assert parse_signature_help("hover") is None


def test_offset_round_trip_on_multiline_text():
    lines = "first\nsecond(a,\n  b".split("\n")
    offset = offset_at_position(EditorPosition(1, 6), lines)

    assert offset == 12
    assert position_at_offset(offset, lines) == (1, 6)


def test_mapping_without_signatures_is_empty_response():
    response = parse_signature_help({"contents": "hover"})

    assert response == SignatureResponse()


def test_offset_label_span_is_clamped_to_label():
    assert OffsetLabel(9, 12).span_in("foo(int, int)") == (9, 12)
    assert OffsetLabel(9, 40).span_in("foo(int)") == (8, 8)
    assert LiteralLabel("int").span_in("foo(int)") is None
