"""Build configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Build settings loaded from environment variables."""

    markdown_dir: Path = Path("markdown")
    output_dir: Path = Path("dist")
    stylesheet: Path = Path("styles.css")
    site_title: str = "宝可梦VGC入门学习"
    site_tagline: str = "Video Game Championships 双打对战学习指南"
    pics_path: str = "VGC/pics"
    highlight_stylesheet: str = (
        "https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/github-dark.min.css"
    )
    highlight_style: str = "github-dark"
    footer_text: str = "Powered by Markdown & GitHub Pages"
    serve_port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="VGCSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
