"""HTML page assembly."""

from jinja2 import Environment, PackageLoader, select_autoescape

from vgcsite.core.models import BuildContext, Document, relative_prefix

INDEX_TITLE = "首页"

env = Environment(
    loader=PackageLoader("vgcsite", "templates"),
    autoescape=select_autoescape(["html"]),
)


def render_page(context: BuildContext, title: str, content: str, depth: int = 0) -> str:
    """Wrap an HTML fragment in the site shell.

    Args:
        context: Build-wide values (stylesheet version, settings).
        title: Page title for ``<title>``.
        content: HTML fragment placed in the main region, unescaped.
        depth: Directory depth of the page below the output root; every
            internal link climbs this many levels.

    Returns:
        Complete HTML document.
    """
    settings = context.settings
    return env.get_template("base.html").render(
        title=title,
        content=content,
        prefix=relative_prefix(depth),
        version=context.version,
        highlight_stylesheet=settings.highlight_stylesheet,
        site_title=settings.site_title,
        footer_text=settings.footer_text,
    )


def render_index(context: BuildContext, documents: list[Document]) -> str:
    """Render the home page listing every document, with the filter script."""
    settings = context.settings
    content = env.get_template("index.html").render(
        documents=documents,
        site_title=settings.site_title,
        site_tagline=settings.site_tagline,
    )
    return render_page(context, INDEX_TITLE, content)


def render_article(context: BuildContext, doc: Document, body_html: str) -> str:
    """Render one document page around its converted body."""
    content = env.get_template("article.html").render(doc=doc, body_html=body_html)
    return render_page(context, doc.title, content, doc.depth)
