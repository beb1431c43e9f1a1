"""Process collaborators: the selector, the shell, and ``$PATH`` discovery."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

from . import MenuError

logger = logging.getLogger(__name__)


class ProcessError(MenuError, RuntimeError):
    """Raised when the selector or shell program cannot be launched."""


def list_search_path_executables(path_env: str | None = None) -> list[tuple[str, Path]]:
    """List ``(filename, full_path)`` for every executable reachable via ``$PATH``.

    Directories are scanned in ``$PATH`` order and the first occurrence of a
    filename wins. Missing or unreadable directories are skipped.
    """
    raw = os.environ.get("PATH", "") if path_env is None else path_env
    found: dict[str, Path] = {}
    for directory in raw.split(os.pathsep):
        if not directory:
            continue
        try:
            with os.scandir(directory) as listing:
                children = sorted(listing, key=lambda item: item.name)
        except OSError as exc:
            logger.debug("Skipping search path directory %s: %s", directory, exc)
            continue
        for child in children:
            if child.name in found:
                continue
            try:
                is_file = child.is_file()
            except OSError:
                continue
            if is_file and os.access(child.path, os.X_OK):
                found[child.name] = Path(child.path)
    return list(found.items())


def run_selector(program: str, args: Sequence[str], candidates: Sequence[str]) -> str | None:
    """Show ``candidates`` in the selector and return the chosen line.

    A non-zero exit (e.g. the user pressed escape) or empty output means nothing
    was chosen and returns ``None``.
    """
    argv = [program, *args]
    logger.debug("Running selector: %s", argv)
    payload = "".join(f"{line}\n" for line in candidates)
    try:
        completed = subprocess.run(
            argv,
            input=payload,
            stdout=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ProcessError(f"failed to spawn selector `{program}`: {exc}") from exc

    if completed.returncode != 0:
        logger.debug("Selector exited with status %d; treating as no selection.", completed.returncode)
        return None
    lines = completed.stdout.splitlines()
    choice = lines[0] if lines else ""
    return choice or None


def run_shell(argv_prefix: Sequence[str], command: str, *, wait: bool = False) -> int | None:
    """Run ``command`` through ``argv_prefix`` (``sh -c`` by default).

    The child is detached into its own session unless ``wait`` is set, in which
    case its exit status is returned.
    """
    argv = [*argv_prefix, command]
    logger.debug("Launching %s", argv)
    try:
        process = subprocess.Popen(argv, start_new_session=not wait)
    except OSError as exc:
        raise ProcessError(f"failed to run command `{command}`: {exc}") from exc
    if not wait:
        return None
    return process.wait()


__all__ = ["ProcessError", "list_search_path_executables", "run_selector", "run_shell"]
