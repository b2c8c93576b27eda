"""Markdown conversion with embed rewriting and code highlighting."""

import logging
import re
from typing import Callable

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from vgcsite.core.models import relative_prefix

logger = logging.getLogger(__name__)

HighlightCallback = Callable[[str, str | None], str]


# Pattern for note-style image embeds: ![[image name.png]]
EMBED_PATTERN = re.compile(r"!\[\[([^\]]+)\]\]")

EXCESS_NEWLINES = re.compile(r"\n{3,}")

# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"

# Fenced code block: ```lang ... ``` or ~~~lang ... ~~~
FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[\w#.+-]*)[^\n]*\n"
    r"(?P<code>.*?)(?<=\n)(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)

DEFAULT_HIGHLIGHT_STYLE = "github-dark"


def rewrite_embeds(body: str, depth: int, pics_path: str = "VGC/pics") -> str:
    """Turn ``![[name]]`` embeds into standard Markdown image links.

    Args:
        body: Markdown text.
        depth: Directory depth of the page the body is rendered into.
        pics_path: Image directory relative to the output root.

    Returns:
        The body with every embed replaced by a block-level image whose
        target climbs ``depth`` levels. Spaces in the target become
        ``%20``; nothing else is escaped. Text without embeds is
        returned unchanged.
    """
    prefix = relative_prefix(depth)

    def replace_match(m: re.Match) -> str:
        name = m.group(1)
        target = f"{prefix}{pics_path}/{name}".replace(" ", "%20")
        return f"\n\n![{name}]({target})\n\n"

    text, count = EMBED_PATTERN.subn(replace_match, body)
    if count:
        text = EXCESS_NEWLINES.sub("\n\n", text)
    return text


def highlight_code(
    code: str,
    lang: str | None = None,
    style: str = DEFAULT_HIGHLIGHT_STYLE,
) -> str:
    """Highlight a code block as HTML with inline styles.

    An unknown or missing language hint falls back to lexer guessing,
    and an unguessable snippet is emitted as plain text.
    """
    lexer = None
    if lang:
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            logger.debug("Unknown code language %r, guessing", lang)
    if lexer is None:
        try:
            lexer = guess_lexer(code)
        except ClassNotFound:
            lexer = TextLexer()
    formatter = HtmlFormatter(style=style, noclasses=True, cssclass="highlight")
    return highlight(code, lexer, formatter)


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


class HighlightPreprocessor(Preprocessor):
    """Preprocessor that replaces fenced code blocks with highlighted HTML."""

    def __init__(self, md: Markdown, highlight: HighlightCallback):
        super().__init__(md)
        self.highlight = highlight

    def run(self, lines: list[str]) -> list[str]:
        """Process lines, replacing fenced code with stashed markup."""
        text = "\n".join(lines)
        if "```" not in text and "~~~" not in text:
            return lines

        def replace_match(m: re.Match) -> str:
            lang = m.group("lang") or None
            html = self.highlight(m.group("code"), lang)
            # Stash raw HTML so the Markdown parser leaves it alone
            return f"\n\n{self.md.htmlStash.store(html)}\n\n"

        text = FENCED_BLOCK_PATTERN.sub(replace_match, text)
        return text.split("\n")


class HighlightExtension(Extension):
    """Markdown extension routing fenced code through a highlight callback."""

    def __init__(self, highlight: HighlightCallback | None = None, **kwargs):
        self.highlight = highlight or highlight_code
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:
        """Add highlight preprocessor ahead of the stock fenced_code one."""
        md.preprocessors.register(
            HighlightPreprocessor(md, self.highlight),
            "highlight_fences",
            28,
        )


def create_parser(highlight: HighlightCallback | None = None) -> Markdown:
    """Create a Markdown parser for article bodies.

    Args:
        highlight: Callback ``(code, lang) -> html`` used for fenced
            code blocks. Defaults to :func:`highlight_code`.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            # Core formatting
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",  # Better list handling
            "nl2br",  # Single newlines become <br>
            # PyMdown extensions
            "pymdownx.tasklist",  # Task lists with checkboxes
            # Custom extensions
            StrikethroughExtension(),  # ~~strikethrough~~
            HighlightExtension(highlight=highlight),  # ```lang fences
        ]
    )


def render_markdown(text: str, highlight: HighlightCallback | None = None) -> str:
    """Convert Markdown text to an HTML fragment.

    Args:
        text: Markdown content, already embed-rewritten.
        highlight: Callback for fenced code blocks.

    Returns:
        HTML string.
    """
    parser = create_parser(highlight)
    return parser.convert(text)
