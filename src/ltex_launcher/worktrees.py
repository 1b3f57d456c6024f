"""Worktree helpers."""

import os
import shutil
from pathlib import Path
from typing import Dict, Optional

from ltex_launcher.types import Worktree


def create_worktree(root: str, env: Optional[Dict[str, str]] = None) -> Worktree:
    """Create a worktree rooted at `root`, inheriting the process environment."""
    return Worktree(
        root=Path(root).expanduser().resolve(),
        env=dict(os.environ if env is None else env),
    )


def which(worktree: Worktree, command: str) -> Optional[str]:
    """Find `command` on the worktree's PATH."""
    search_path = worktree.env.get("PATH", os.environ.get("PATH", os.defpath))
    return shutil.which(command, path=search_path)
