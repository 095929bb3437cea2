"""
customer_intel.clipboard

Plain-text clipboard writes for the reply draft.

Responsibilities:
- Try the platform clipboard command first (pbcopy / clip / wl-copy / xclip / xsel).
- Fall back to the legacy Tk selection clipboard.
- Report success as a bool; never raise.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from collections.abc import Callable

from customer_intel.observability.logging import get_logger

log = get_logger(__name__)

ClipboardWriter = Callable[[str], None]

_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("clip",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def platform_command_writer(text: str) -> None:
    for cmd in _COMMANDS:
        if shutil.which(cmd[0]) is None:
            continue
        # `clip` on Windows expects UTF-16; everything else takes UTF-8.
        encoding = "utf-16-le" if cmd[0] == "clip" and sys.platform == "win32" else "utf-8"
        subprocess.run(cmd, input=text.encode(encoding), check=True, timeout=5)
        return
    raise RuntimeError("no clipboard command available")


def tk_selection_writer(text: str) -> None:
    import tkinter

    root = tkinter.Tk()
    try:
        root.withdraw()
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
    finally:
        root.destroy()


class ClipboardBridge:
    def __init__(
        self,
        *,
        primary: ClipboardWriter = platform_command_writer,
        fallback: ClipboardWriter = tk_selection_writer,
    ) -> None:
        self._primary = primary
        self._fallback = fallback

    def copy(self, text: str) -> bool:
        try:
            self._primary(text)
            return True
        except Exception as e:
            log.info("clipboard_primary_failed", error=str(e))

        try:
            self._fallback(text)
            return True
        except Exception as e:
            log.warning("clipboard_copy_failed", error=str(e))
            return False


# --- Module Notes -----------------------------------------------------------
# Writers are injectable so tests (and headless servers) never touch a real clipboard.
