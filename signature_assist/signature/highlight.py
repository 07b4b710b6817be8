from __future__ import annotations

import html
import re

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _find_parameter(source: str, variable: str) -> int:
    if not variable:
        return -1
    if _IDENTIFIER_RE.match(variable):
        match = re.search(rf"(?<![A-Za-z0-9_]){re.escape(variable)}(?![A-Za-z0-9_])", source)
        if match:
            return match.start()
    return source.find(variable)


def highlight_parameter_html(
    source: str,
    variable: str,
    language: str,
    *,
    span: tuple[int, int] | None = None,
) -> str:
    """Render ``source`` as a ``<pre><code>`` block with the parameter wrapped in ``<mark>``.

    ``span`` is the exact ``[start, end)`` range of the parameter in ``source``;
    without it the first whole-word occurrence of ``variable`` is marked.
    """
    lang = re.sub(r"[^A-Za-z0-9_+-]", "", str(language or ""))
    if span is not None and 0 <= span[0] < span[1] <= len(source):
        start, end = span
    else:
        start = _find_parameter(source, variable)
        end = start + len(variable)
    if start < 0:
        body = html.escape(source)
    else:
        body = (
            html.escape(source[:start])
            + "<mark>"
            + html.escape(source[start:end])
            + "</mark>"
            + html.escape(source[end:])
        )
    return f'<pre><code class="language-{lang}">{body}</code></pre>'
