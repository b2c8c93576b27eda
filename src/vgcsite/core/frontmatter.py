"""YAML front-matter splitting."""

import re
from typing import Any

import yaml

from vgcsite.core.models import FrontMatterError, InvalidDateError

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


def _stringify_keys(value: Any) -> Any:
    """Recursively turn mapping keys into strings.

    YAML allows dates, numbers and booleans as keys; the filter script
    reads the metadata as JSON, whose object keys are strings.
    """
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    return value


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter mapping and Markdown body.

    Text without a leading ``---`` block is returned unchanged with an
    empty mapping. An empty block yields an empty mapping.

    Raises:
        FrontMatterError: The block is not valid YAML or not a mapping.
        InvalidDateError: The block holds a timestamp that is not a real
            calendar date, such as ``2024-02-30``.
    """
    text = text.removeprefix("\ufeff")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid front-matter: {e}") from e
    except ValueError as e:
        # Raised by the timestamp constructor for out-of-range dates
        raise InvalidDateError(f"invalid date in front-matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front-matter must be a mapping, got {type(data).__name__}"
        )
    return _stringify_keys(data), text[match.end() :]
