from __future__ import annotations

from customer_intel.clipboard import ClipboardBridge


def _failing(text: str) -> None:
    raise OSError("clipboard unavailable")


def test_primary_writer_success() -> None:
    written: list[str] = []
    bridge = ClipboardBridge(primary=written.append, fallback=_failing)

    assert bridge.copy("hello") is True
    assert written == ["hello"]


def test_falls_back_when_primary_fails() -> None:
    written: list[str] = []
    bridge = ClipboardBridge(primary=_failing, fallback=written.append)

    assert bridge.copy("draft text") is True
    assert written == ["draft text"]


def test_returns_false_instead_of_raising() -> None:
    bridge = ClipboardBridge(primary=_failing, fallback=_failing)
    assert bridge.copy("draft text") is False
