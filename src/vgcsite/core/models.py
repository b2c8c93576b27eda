"""Data models for vgcsite."""

import datetime
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vgcsite.config import Settings


class SiteBuildError(Exception):
    """Base class for errors that abort a build."""


class FrontMatterError(SiteBuildError):
    """Front-matter block could not be parsed into a mapping."""


class InvalidDateError(SiteBuildError):
    """A front-matter date is not a calendar date."""


class DuplicateOutputError(SiteBuildError):
    """Two source documents map to the same output file."""


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def relative_prefix(depth: int) -> str:
    """Return the ``../`` chain that climbs ``depth`` directories."""
    return "../" * depth if depth > 0 else ""


class Document(BaseModel):
    """One source Markdown file, ready to render."""

    model_config = ConfigDict(frozen=True)

    title: str
    date: datetime.date
    description: str
    output_path: str
    body: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    category: str = "."
    format: str = ""

    @property
    def depth(self) -> int:
        """Number of directories between the output root and this page."""
        return len(self.output_path.split("/")) - 1

    @property
    def home_link(self) -> str:
        return relative_prefix(self.depth) + "index.html"

    @property
    def date_text(self) -> str:
        return self.date.isoformat()

    @property
    def metadata_json(self) -> str:
        """Front-matter serialised for the client-side filter."""
        return json.dumps(self.metadata, ensure_ascii=False, default=_json_default)


class BuildContext(BaseModel):
    """Values fixed once per build and shared by every rendered page."""

    version: int = Field(default_factory=lambda: int(datetime.datetime.now().timestamp() * 1000))
    settings: Settings = Field(default_factory=Settings)
