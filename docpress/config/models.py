from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class SiteConfig(BaseModel):
    """One source tree → asset tree mapping."""

    source: str
    structure: str
    assets: str
    exclude: list[str] = ["README.md"]


class GitHubConfig(BaseModel):
    enabled: bool = True
    repo: str = ""
    token_env: str = "GITHUB_TOKEN"
    base_url: str = "https://api.github.com"
    since: date = date(2018, 6, 1)
    timeout: int = 15


class RenderConfig(BaseModel):
    extensions: list[str] = ["tables"]
    code_block_class: str = "highlight"
    language_prefix: str = "language-"


class OutputConfig(BaseModel):
    root: str = "src"
    indent: int | None = None


class DocpressConfig(BaseModel):
    sites: list[SiteConfig] = Field(default_factory=list)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    on_error: Literal["fail_fast", "collect"] = "fail_fast"
    log_level: Literal["debug", "info", "warn", "error"] = "info"
