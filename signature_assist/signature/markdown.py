"""Render signature help descriptions as bounded Markdown."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from signature_assist.lsp.types import (
    Documentation,
    Markdown,
    PlainText,
    SignatureDescription,
    SignatureResponse,
)

logger = logging.getLogger(__name__)


class CodeHighlighter(Protocol):
    def __call__(
        self,
        source: str,
        variable: str,
        language: str,
        *,
        span: tuple[int, int] | None = None,
    ) -> str:
        ...


DEFAULT_MAX_LINES = 4

_MARKDOWN_SPECIAL_RE = re.compile(r"[\\*#\[\]<>_]")
_ESCAPE_RE = re.compile(r"([\\#*_\[\]])")


@dataclass(frozen=True)
class FormattedBlock:
    lead_text: str
    details_text: str | None = None

    def render(self) -> str:
        if self.details_text is None:
            return self.lead_text
        if not self.lead_text:
            return f"<details>\n{self.details_text}\n</details>"
        return f"{self.lead_text}\n<details>\n{self.details_text}\n</details>"


def escape_markdown(text: str) -> str:
    # backticks are kept so inline code still renders
    text = _ESCAPE_RE.sub(r"\\\1", str(text or ""))
    return text.replace("\n", "  \n")


def documentation_markdown(doc: Documentation) -> str:
    if isinstance(doc, Markdown):
        return doc.value
    return escape_markdown(doc.value)


def code_block(label: str, language: str = "") -> str:
    return f"```{language}\n{label}\n```"


def extract_lead(lines: list[str], size: int) -> tuple[str, str] | None:
    """Split ``lines`` after the first paragraph if it fits in ``size`` lines.

    Returns ``(lead, remainder)`` or ``None`` when no blank line occurs within
    the first ``size + 1`` lines, or when the lead carries Markdown syntax that
    a split could break.
    """
    lead_lines: list[str] = []
    split_on_paragraph = False
    for line in lines[: size + 1]:
        if not line.strip():
            split_on_paragraph = True
            break
        lead_lines.append(line)

    lead = "\n".join(lead_lines)
    if split_on_paragraph and not _MARKDOWN_SPECIAL_RE.search(lead):
        return lead, "\n".join(lines[len(lead_lines) + 1:])
    return None


def split_details(details: str, max_lines: int = DEFAULT_MAX_LINES) -> FormattedBlock:
    lines = details.strip().split("\n")
    if len(lines) <= max_lines:
        return FormattedBlock(details)
    split = extract_lead(lines, max_lines)
    if split is None:
        return FormattedBlock("", details)
    lead, remainder = split
    return FormattedBlock(lead, remainder)


def _details_for(description: SignatureDescription) -> str:
    doc = description.documentation
    if isinstance(doc, PlainText):
        label = description.label.strip()
        kept = [escape_markdown(line) for line in doc.value.split("\n") if line.strip() != label]
        return "".join(f"{line}\n" for line in kept)
    if isinstance(doc, Markdown):
        return doc.value
    documented = [p.documentation for p in description.parameters if p.documentation is not None]
    return "\n".join(f"- {documentation_markdown(item)}" for item in documented)


def format_signature(
    description: SignatureDescription,
    language: str = "",
    active_parameter: int | None = None,
    *,
    highlighter: CodeHighlighter,
    max_lines: int = DEFAULT_MAX_LINES,
    log: logging.Logger | None = None,
) -> str:
    log = log or logger
    label = description.label
    parameters = description.parameters

    if parameters and active_parameter is not None:
        if 0 <= active_parameter < len(parameters):
            parameter_label = parameters[active_parameter].label
            markdown = highlighter(
                label,
                parameter_label.substring_of(label),
                language,
                span=parameter_label.span_in(label),
            )
        else:
            log.error(
                "LSP server returned wrong number for activeParameter (%s of %s) for: %r",
                active_parameter,
                len(parameters),
                label,
            )
            markdown = code_block(label, language)
    else:
        markdown = code_block(label, language)

    details = _details_for(description)
    if not details.strip():
        return markdown + "\n"
    return markdown + "\n\n" + split_details(details, max_lines).render()


def format_signature_help(
    response: SignatureResponse,
    language: str = "",
    *,
    highlighter: CodeHighlighter,
    max_lines: int = DEFAULT_MAX_LINES,
    log: logging.Logger | None = None,
) -> str:
    log = log or logger
    signatures = response.signatures
    active = response.active_signature
    if active is not None:
        if 0 <= active < len(signatures):
            item = signatures[active]
            parameter = item.active_parameter
            if parameter is None:
                parameter = response.active_parameter
            return format_signature(
                item, language, parameter, highlighter=highlighter, max_lines=max_lines, log=log
            )
        log.error(
            "LSP server returned wrong number for activeSignature (%s of %s)",
            active,
            len(signatures),
        )

    return "\n\n".join(
        format_signature(item, language, None, highlighter=highlighter, max_lines=max_lines, log=log)
        for item in signatures
    )
