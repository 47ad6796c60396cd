"""Markdown Renderer — untrusted markdown to sanitized HTML.

Invariants:
    - render() is total: malformed markdown renders best-effort, never raises
    - render() is deterministic: identical input yields byte-identical output
    - Output never contains live <script>/<style> elements, event handlers,
      or javascript: URLs
    - Code block contents are escaped text inside <pre><code>

Design Decisions:
    - markdown-it-py CommonMark preset: raw HTML blocks interrupt paragraphs the
      same way on every platform, so sanitization sees whole elements
    - nh3 (ammonia bindings) as the allow-list sanitizer; its defaults drop
      <script>/<style> together with their contents
    - Parser built once at import time; MarkdownIt instances are reentrant
"""

import nh3
from markdown_it import MarkdownIt

_parser = MarkdownIt("commonmark", {"html": True}).enable("strikethrough")


def render(raw: str) -> str:
    """Render raw markdown to sanitized HTML."""
    return nh3.clean(_parser.render(raw))
