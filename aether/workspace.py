"""Workspace: the three artifact files on disk, and an mtime poller for edits.

Polling (not inotify/watchdog) keeps this dependency-free; three stat()
calls per poll are negligible.
"""

import asyncio
import sys
from pathlib import Path
from typing import Callable

from aether.config import get_config
from aether.state import FIELDS, SEED_STATE, SourceTriple


def workspace_paths(directory: Path) -> dict[str, Path]:
    """Map each source field to its file inside ``directory``."""
    names = get_config().get("workspace_files", {})
    defaults = {"markup": "markup.html", "style": "style.css", "logic": "script.js"}
    return {field: Path(directory) / names.get(field, defaults[field]) for field in FIELDS}


def load_workspace(directory: Path) -> SourceTriple:
    """Read the three artifact files.

    A missing file reads as the empty string. A directory with none of the
    files yields the seed state.
    """
    paths = workspace_paths(directory)
    if not any(path.exists() for path in paths.values()):
        return dict(SEED_STATE)
    return {
        field: path.read_text(encoding="utf-8") if path.exists() else ""
        for field, path in paths.items()
    }


def write_workspace(directory: Path, triple: SourceTriple) -> None:
    """Write all three artifact files, creating the directory if needed."""
    Path(directory).mkdir(parents=True, exist_ok=True)
    for field, path in workspace_paths(directory).items():
        path.write_text(triple[field], encoding="utf-8")


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return 0.0


class WorkspaceWatcher:
    """Polls the workspace files and reports each changed one as an edit."""

    def __init__(
        self,
        directory: Path,
        on_edit: Callable[[str, str], None],
        poll_interval: float | None = None,
    ):
        if poll_interval is None:
            poll_interval = get_config().get("poll_interval_ms", 200) / 1000
        self._paths = workspace_paths(directory)
        self._on_edit = on_edit
        self._poll_interval = poll_interval
        self._seen = {field: _mtime(path) for field, path in self._paths.items()}
        self._stopped = False

    def poll(self) -> list[str]:
        """Check every file once; report changed ones. Returns the changed field names.

        A file that cannot be read or decoded is logged and skipped until its
        mtime changes again.
        """
        changed = []
        for field, path in self._paths.items():
            current = _mtime(path)
            if current == self._seen[field]:
                continue
            self._seen[field] = current
            try:
                text = path.read_text(encoding="utf-8") if current else ""
            except (OSError, UnicodeDecodeError) as exc:
                print(f"[Aether] Could not read {path}: {exc}", file=sys.stderr)
                continue
            self._on_edit(field, text)
            changed.append(field)
        return changed

    def stop(self) -> None:
        self._stopped = True

    async def run(self) -> None:
        """Poll until ``stop()`` is called."""
        while not self._stopped:
            self.poll()
            await asyncio.sleep(self._poll_interval)
