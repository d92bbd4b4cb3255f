"""
Host services used by directive handlers

The expansion engine never touches the operating system directly. Each
handler goes through a HostServices instance, so tests (or embedding
applications) can substitute their own environment, clipboard, command
runner and file reader.

Trust boundary: the default command runner executes arbitrary shell text
and the default file reader opens any path. Templates are trusted input.
"""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import pyperclip

from ..config import appsettings
from .log import LOG, WARN


def environment_get(name: str) -> Optional[str]:
    """Look up an environment variable of the current process"""
    return os.environ.get(name)


def clipboard_read() -> Optional[str]:
    """
    Read text from the system clipboard

    Returns:
        Clipboard text, or None if no clipboard mechanism is available
    """
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        LOG(f"Clipboard unavailable: {e}", level=2)
        return None


def command_run(command: str) -> Optional[str]:
    """
    Run command through the shell and capture its standard output

    The call blocks until the command exits; there is no timeout.

    Returns:
        Captured stdout (also when the exit status is non-zero), or None if
        the shell could not be started
    """
    LOG(f"exec: {command}", level=2)
    try:
        completed = subprocess.run(
            command,
            shell=True,
            executable=appsettings.shell,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding=appsettings.encoding,
            errors="replace",
        )
    except OSError as e:
        WARN(f"Could not run '{command}': {e}")
        return None

    if completed.returncode != 0:
        LOG(f"exec exited with status {completed.returncode}: {completed.stderr.strip()}", level=2)
    return completed.stdout


def file_read(path: str) -> str:
    """
    Read a whole text file, line endings untouched

    Raises:
        OSError: If the file cannot be opened or read
        UnicodeDecodeError: If the file is not valid in the configured encoding
    """
    return Path(path).read_bytes().decode(appsettings.encoding)


@dataclass(frozen=True)
class HostServices:
    """
    Collaborators consumed by the directive handlers

    Attributes:
        env_get: name -> value or None (used by {{ env }})
        clipboard_read: () -> text or None (used by {{ clip }})
        command_run: shell text -> stdout or None (used by {{ exec }})
        file_read: path -> contents, raising OSError on failure (used by {{ file }})
    """
    env_get: Callable[[str], Optional[str]] = field(default=environment_get)
    clipboard_read: Callable[[], Optional[str]] = field(default=clipboard_read)
    command_run: Callable[[str], Optional[str]] = field(default=command_run)
    file_read: Callable[[str], str] = field(default=file_read)
