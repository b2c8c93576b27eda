"""Unit tests for build configuration."""

from pathlib import Path
from unittest.mock import patch

from vgcsite.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings()
            assert s.markdown_dir == Path("markdown")
            assert s.output_dir == Path("dist")
            assert s.stylesheet == Path("styles.css")
            assert s.pics_path == "VGC/pics"
            assert s.serve_port == 8000

    def test_from_env(self):
        env = {
            "VGCSITE_MARKDOWN_DIR": "/tmp/notes",
            "VGCSITE_OUTPUT_DIR": "/tmp/site",
            "VGCSITE_PICS_PATH": "assets",
            "VGCSITE_SERVE_PORT": "9000",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings()
            assert s.markdown_dir == Path("/tmp/notes")
            assert s.output_dir == Path("/tmp/site")
            assert s.pics_path == "assets"
            assert s.serve_port == 9000

    def test_keyword_overrides_env(self):
        with patch.dict("os.environ", {"VGCSITE_OUTPUT_DIR": "/tmp/site"}, clear=True):
            s = Settings(output_dir=Path("public"))
            assert s.output_dir == Path("public")
