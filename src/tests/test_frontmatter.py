"""Unit tests for front-matter splitting."""

import datetime

import pytest

from vgcsite.core.frontmatter import split_frontmatter
from vgcsite.core.models import FrontMatterError, InvalidDateError


class TestSplitFrontmatter:
    def test_valid_frontmatter(self):
        metadata, body = split_frontmatter("---\ntitle: Hello\n---\nWorld")
        assert metadata == {"title": "Hello"}
        assert body == "World"

    def test_no_frontmatter(self):
        content = "# Just a heading\n\nSome text."
        metadata, body = split_frontmatter(content)
        assert metadata == {}
        assert body == content

    def test_empty_frontmatter(self):
        metadata, body = split_frontmatter("---\n---\nBody text")
        assert metadata == {}
        assert body == "Body text"

    def test_blank_frontmatter(self):
        metadata, body = split_frontmatter("---\n\n---\n\nBody text")
        assert metadata == {}
        assert body.strip() == "Body text"

    def test_extra_fields_preserved(self):
        content = "---\ntitle: Test\nstatus: draft\ntags:\n  - wiki\n---\n\nBody"
        metadata, _ = split_frontmatter(content)
        assert metadata == {"title": "Test", "status": "draft", "tags": ["wiki"]}

    def test_date_becomes_date_object(self):
        metadata, _ = split_frontmatter("---\ndate: 2024-01-05\n---\n")
        assert metadata["date"] == datetime.date(2024, 1, 5)

    def test_only_first_block_is_frontmatter(self):
        content = "---\ntitle: A\n---\nText\n---\nMore"
        metadata, body = split_frontmatter(content)
        assert metadata == {"title": "A"}
        assert body == "Text\n---\nMore"

    def test_windows_line_endings(self):
        metadata, body = split_frontmatter("---\r\ntitle: Win\r\n---\r\nBody")
        assert metadata == {"title": "Win"}
        assert body == "Body"

    def test_byte_order_mark_ignored(self):
        metadata, _ = split_frontmatter("\ufeff---\ntitle: BOM\n---\nBody")
        assert metadata == {"title": "BOM"}

    def test_non_string_keys_stringified(self):
        metadata, _ = split_frontmatter("---\n2024: season\n---\n")
        assert metadata == {"2024": "season"}

    def test_malformed_yaml(self):
        with pytest.raises(FrontMatterError):
            split_frontmatter("---\ntitle: [unclosed\n---\n\nBody")

    def test_non_mapping_frontmatter(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\nBody")

    def test_impossible_date(self):
        with pytest.raises(InvalidDateError, match="invalid date"):
            split_frontmatter("---\ndate: 2024-02-30\n---\nx")

    def test_nested_non_string_keys_stringified(self):
        content = "---\nschedule:\n  2024-01-05: regional\n  true: yes\nrounds:\n  - 1: swiss\n---\n"
        metadata, _ = split_frontmatter(content)
        assert metadata == {
            "schedule": {"2024-01-05": "regional", "True": True},
            "rounds": [{"1": "swiss"}],
        }
