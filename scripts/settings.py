"""Config loading and logging setup shared by the CLI and the server."""

import logging
import os
import sys
from pathlib import Path

import yaml

# Resolve paths relative to repo root
REPO_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG = REPO_ROOT / "config.yml"
DEFAULT_TEMPLATE = REPO_ROOT / "templates" / "activity.md.j2"

REQUIRED_CONFIG_KEYS = ["github_user", "blog_dir"]


def setup_logging(verbose: bool = False):
    """Configure logging for all modules."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def load_config(config_path: Path) -> dict:
    """Load and validate config file."""
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    # Validate required keys
    missing = [k for k in REQUIRED_CONFIG_KEYS if k not in config]
    if missing:
        raise ValueError(f"Missing required config keys: {', '.join(missing)}")

    # Set defaults for optional sections
    config.setdefault("api", {})
    config.setdefault("metadata", {})

    return config


def config_path_from_env() -> Path:
    return Path(os.environ.get("PORTFOLIO_CONFIG", DEFAULT_CONFIG))


def resolve_blog_dir(config: dict) -> Path:
    """Relative blog_dir values are taken from the repo root."""
    blog_dir = Path(config["blog_dir"])
    return blog_dir if blog_dir.is_absolute() else REPO_ROOT / blog_dir
