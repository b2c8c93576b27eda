"""Filesystem access: source document collection and image mirroring."""

import datetime
import logging
import shutil
from pathlib import Path
from typing import Any, Iterator

from vgcsite.core.frontmatter import split_frontmatter
from vgcsite.core.models import Document, FrontMatterError, InvalidDateError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".bmp", ".ico"}
)

MARKDOWN_SUFFIX = ".md"

DESCRIPTION_LENGTH = 150


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def walk_files(directory: Path) -> Iterator[Path]:
    """Yield every file below ``directory`` in sorted path order.

    Symlinked directories are followed like real ones; a directory that
    resolves to one already visited is skipped.
    """
    seen: set[Path] = set()

    def walk(current: Path) -> Iterator[Path]:
        resolved = current.resolve()
        if resolved in seen:
            logger.debug("Skipping %s, already visited", current)
            return
        seen.add(resolved)
        for item in sorted(current.iterdir()):
            if item.is_dir():
                yield from walk(item)
            elif item.is_file():
                yield item

    yield from walk(directory)


def mirror_assets(source_dir: Path, target_dir: Path) -> None:
    """Copy image files from ``source_dir`` into the same place under ``target_dir``.

    Subdirectories are walked unconditionally; a target directory is only
    created once an image needs to land in it. Other files are ignored.
    """
    if not source_dir.exists():
        return

    for item in walk_files(source_dir):
        if not is_image_file(item):
            continue
        relative = item.relative_to(source_dir)
        target = target_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(item, target)
        logger.debug("Copied image %s", relative.as_posix())


class DocumentCollector:
    """Reads every Markdown file below a source directory into Documents."""

    def __init__(self, base_path: Path):
        self.base_path = base_path

    def _iter_sources(self) -> list[Path]:
        """All Markdown files below the base path, in path order."""
        return [
            path
            for path in walk_files(self.base_path)
            if path.name.endswith(MARKDOWN_SUFFIX)
        ]

    def _output_path(self, relative: Path) -> str:
        """Convert ``guides/intro.md`` to ``guides/intro.html``."""
        return relative.with_suffix(".html").as_posix()

    def _category(self, relative: Path) -> str:
        return relative.parent.as_posix()

    def _modified_date(self, path: Path) -> datetime.date:
        mtime = path.stat().st_mtime
        return datetime.datetime.fromtimestamp(mtime, tz=datetime.timezone.utc).date()

    def _coerce_date(self, value: Any, path: Path) -> datetime.date:
        """Turn a front-matter ``date`` value into a calendar date.

        Raises:
            InvalidDateError: The value is text that is not an ISO date.
        """
        if isinstance(value, datetime.datetime):
            if value.tzinfo is not None:
                value = value.astimezone(datetime.timezone.utc)
            return value.date()
        if isinstance(value, datetime.date):
            return value

        text = str(value).strip()
        try:
            parsed = datetime.datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidDateError(
                f"{path}: date {text!r} is not a YYYY-MM-DD calendar date"
            ) from e
        return self._coerce_date(parsed, path)

    def _description(self, metadata: dict[str, Any], body: str) -> str:
        if metadata.get("description"):
            return str(metadata["description"])
        return body[:DESCRIPTION_LENGTH].replace("\n", " ")

    def load(self, path: Path) -> Document:
        """Build a Document from one Markdown file."""
        raw = path.read_text(encoding="utf-8")
        relative = path.relative_to(self.base_path)
        try:
            metadata, body = split_frontmatter(raw)
        except (FrontMatterError, InvalidDateError) as e:
            raise type(e)(f"{relative}: {e}") from e

        raw_date = metadata.get("date")
        if raw_date is None or raw_date == "":
            date = self._modified_date(path)
        else:
            date = self._coerce_date(raw_date, relative)

        return Document(
            title=str(metadata.get("title") or path.stem),
            date=date,
            description=self._description(metadata, body),
            output_path=self._output_path(relative),
            body=body,
            metadata=metadata,
            category=self._category(relative),
            format=str(metadata.get("format") or ""),
        )

    def collect(self) -> list[Document]:
        """Load all documents, oldest first.

        Documents sharing a date keep their path order.
        """
        documents = [self.load(path) for path in self._iter_sources()]
        documents.sort(key=lambda doc: doc.date)
        return documents
