"""Markdown Renderer — sanitized HTML output.

Tests cover:
    - Raw <script> blocks are removed with their content
    - Scripts inside fenced code appear escaped inside <pre><code>
    - Strikethrough extension is enabled
    - Event handlers and javascript: URLs are stripped
    - Determinism and totality
"""

from blog.core.markdown import render


SCRIPT_MARKDOWN = """# Heading
Somebody once told me the world is gonna roll me.
<script>console.print("YOLO")</script>
"""

FENCED_SCRIPT_MARKDOWN = """# Heading
Somebody once told me the world is gonna roll me.
```html
<script>console.print("YOLO")</script>
```
"""


def test_script_tag_is_stripped():
    assert render(SCRIPT_MARKDOWN) == (
        "<h1>Heading</h1>\n"
        "<p>Somebody once told me the world is gonna roll me.</p>\n"
        "\n"
    )


def test_script_in_fenced_code_is_escaped():
    assert render(FENCED_SCRIPT_MARKDOWN) == (
        "<h1>Heading</h1>\n"
        "<p>Somebody once told me the world is gonna roll me.</p>\n"
        '<pre><code>&lt;script&gt;console.print("YOLO")&lt;/script&gt;\n'
        "</code></pre>\n"
    )


def test_fenced_code_never_contains_live_script():
    html = render(FENCED_SCRIPT_MARKDOWN)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_is_deterministic():
    source = "Some *emphasis*, a [link](https://example.com) and ~~old~~ text."
    assert render(source) == render(source)


def test_strikethrough_enabled():
    assert "<s>gone</s>" in render("~~gone~~")


def test_event_handlers_removed():
    html = render('<p onclick="alert(1)">hi</p>')
    assert "onclick" not in html
    assert "hi" in html


def test_javascript_urls_removed():
    html = render('<a href="javascript:alert(1)">click</a>')
    assert "javascript:" not in html


def test_structural_tags_preserved():
    html = render("## Sub\n\n- one\n- two\n\n**bold** and `code`")
    assert "<h2>Sub</h2>" in html
    assert "<li>one</li>" in html
    assert "<strong>bold</strong>" in html
    assert "<code>code</code>" in html


def test_malformed_markdown_renders_without_error():
    html = render("**unclosed [link( <div <b>")
    assert isinstance(html, str)


def test_empty_input_renders_empty():
    assert render("") == ""
