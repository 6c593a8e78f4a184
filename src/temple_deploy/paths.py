"""Path management utilities for temple-deploy."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACTS_PATH, SECRETS_FILE


def get_default_artifacts_dir() -> Path:
    """
    Get default artifacts directory.

    Returns:
        $TEMPLE_ARTIFACTS if set, otherwise ./src/artifacts
    """
    override = os.environ.get("TEMPLE_ARTIFACTS")
    if override:
        return Path(override).absolute()
    return (Path.cwd() / ARTIFACTS_PATH).absolute()


def get_artifact_paths(artifacts_root: Optional[Union[Path, str]] = None) -> tuple[Path, Path]:
    """
    Get artifact directory paths.

    Args:
        artifacts_root: Custom artifacts directory (defaults to ./src/artifacts)

    Returns:
        Tuple of (artifacts_root, build_info_dir)
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    return (artifacts_root, artifacts_root / "build-info")


def get_secrets_path() -> Path:
    """Path to secrets.json in the current working directory."""
    return Path.cwd() / SECRETS_FILE
