from .loader import load_config
from .models import (
    DocpressConfig,
    GitHubConfig,
    OutputConfig,
    RenderConfig,
    SiteConfig,
)

__all__ = [
    "DocpressConfig",
    "GitHubConfig",
    "OutputConfig",
    "RenderConfig",
    "SiteConfig",
    "load_config",
]
