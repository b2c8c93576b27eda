"""Full site build: assets, index page and one page per document."""

import functools
import logging
import shutil
from pathlib import Path

from vgcsite.core.models import BuildContext, Document, DuplicateOutputError
from vgcsite.core.parser import highlight_code, render_markdown, rewrite_embeds
from vgcsite.core.render import render_article, render_index
from vgcsite.core.storage import DocumentCollector, mirror_assets

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def check_unique_outputs(documents: list[Document]) -> None:
    """Refuse document sets where two pages would share a file.

    The generated home page counts as taken.

    Raises:
        DuplicateOutputError: Listing every clashing output path.
    """
    seen = {INDEX_FILE}
    clashes = []
    for doc in documents:
        if doc.output_path in seen:
            clashes.append(doc.output_path)
        seen.add(doc.output_path)
    if clashes:
        raise DuplicateOutputError(
            "multiple sources render to: " + ", ".join(sorted(set(clashes)))
        )


def _write(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


class SiteBuilder:
    """Runs one complete, sequential rebuild of the output directory."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.settings = context.settings
        self.highlight = functools.partial(
            highlight_code, style=self.settings.highlight_style
        )

    def _prepare_output(self) -> None:
        output_dir = self.settings.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        stylesheet = self.settings.stylesheet
        if stylesheet.is_file():
            shutil.copyfile(stylesheet, output_dir / "styles.css")
        else:
            logger.debug("No stylesheet at %s, skipping", stylesheet)

    def _ensure_source(self) -> None:
        source_dir = self.settings.markdown_dir
        if not source_dir.exists():
            source_dir.mkdir(parents=True)
            logger.info("Created %s, add .md files there and rebuild", source_dir)

    def render_document(self, doc: Document) -> str:
        """Convert one document to its finished HTML page."""
        body = rewrite_embeds(doc.body, doc.depth, self.settings.pics_path)
        body_html = render_markdown(body, highlight=self.highlight)
        return render_article(self.context, doc, body_html)

    def build(self) -> list[Document]:
        """Rebuild the site and return the documents in index order."""
        output_dir = self.settings.output_dir
        self._prepare_output()
        self._ensure_source()
        mirror_assets(self.settings.markdown_dir, output_dir)

        documents = DocumentCollector(self.settings.markdown_dir).collect()
        check_unique_outputs(documents)

        _write(output_dir / INDEX_FILE, render_index(self.context, documents))

        for doc in documents:
            _write(output_dir / doc.output_path, self.render_document(doc))
            logger.debug("Rendered %s", doc.output_path)

        logger.info("Built %d documents", len(documents))
        logger.info("Output directory: %s", output_dir)
        return documents


def build_site(context: BuildContext | None = None) -> list[Document]:
    """Build the site with ``context``, or a fresh one from the environment."""
    return SiteBuilder(context or BuildContext()).build()
