"""Suite configuration: environment snapshot and browser projects."""

from .env_config import DEFAULT_BASE_URL, EnvConfig, get_env_config, load_env_config
from .projects import DEFAULT_PROJECT, PROJECTS, BrowserProject, context_options, resolve_project

__all__ = [
    "BrowserProject",
    "DEFAULT_BASE_URL",
    "DEFAULT_PROJECT",
    "EnvConfig",
    "PROJECTS",
    "context_options",
    "get_env_config",
    "load_env_config",
    "resolve_project",
]
