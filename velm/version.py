from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

UNKNOWN_VERSION = "0.0.0+unknown"


class BuildInfo(NamedTuple):
    version: str
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=cwd or os.getcwd(), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def get_version() -> str:
    """Installed distribution version of velm."""
    try:
        return importlib.metadata.version("velm")
    except importlib.metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


def get_build_info() -> BuildInfo:
    # Only a source checkout has git metadata next to the package
    here = Path(__file__).resolve().parent
    root = _run_git(["rev-parse", "--show-toplevel"], cwd=str(here))
    commit = None
    dirty = False
    if root and (Path(root) / "velm").resolve() == here:
        commit = _run_git(["rev-parse", "HEAD"], cwd=root)
        status = _run_git(["status", "--porcelain"], cwd=root)
        dirty = bool(status)
    return BuildInfo(version=get_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    if not info.commit:
        return info.version
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{info.version} ({info.commit[:7]}{dirty_suffix})"
