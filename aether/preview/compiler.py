"""Preview Compiler: assembles the live-preview document and debounces rebuilds.

Each change re-arms a single-shot timer; only when no further change arrives
within the quiescence window is the document rebuilt from the latest
snapshot. Rebuilds are full replacements, never patches.
"""

import re
import sys
from typing import Callable, Protocol

from aether.config import get_config
from aether.state import SourceTriple

BASE_STYLE = "body { margin: 0; padding: 0; font-family: sans-serif; }"

_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.IGNORECASE)
_COMMENT_OPEN_RE = re.compile(r"<!--")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later``; an asyncio event loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


def escape_logic(logic: str) -> str:
    """Escape closing script tags so the logic cannot end its own <script> block.

    ``</script>`` becomes ``<\\/script>``, which is the same string to the
    JavaScript parser but no longer an end tag to the HTML parser.
    ``<!--`` becomes ``<\\!--`` for the same reason: left alone, a following
    ``<script>`` would make the tokenizer skip the real closing tag.
    """
    logic = _SCRIPT_CLOSE_RE.sub(r"<\\/\1", logic)
    return _COMMENT_OPEN_RE.sub(r"<\\!--", logic)


def build_document(triple: SourceTriple) -> str:
    """Build the self-contained preview document for one triple.

    The logic runs inside a try/catch guard: a runtime fault is reported to
    the document's own console and never stops markup/style from rendering.
    """
    safe_logic = escape_logic(triple["logic"])
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <style>
      {BASE_STYLE}
      {triple['style']}
    </style>
  </head>
  <body>
    {triple['markup']}
    <script>
      try {{
        {safe_logic}
      }} catch (err) {{
        console.error(err);
      }}
    </script>
  </body>
</html>
"""


class PreviewCompiler:
    """Debounced, full-replacement preview builder.

    States: idle (no timer) and pending (one timer armed). ``notify_change``
    moves idle -> pending or resets a pending timer; the timer firing moves
    pending -> idle and produces a new ``document``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_render: Callable[[str], None] | None = None,
        debounce_ms: int | None = None,
    ):
        if debounce_ms is None:
            debounce_ms = get_config().get("debounce_ms", 600)
        self._scheduler = scheduler
        self._on_render = on_render
        self._delay = debounce_ms / 1000
        self._handle: TimerHandle | None = None
        self._snapshot: SourceTriple | None = None
        self._closed = False
        self.document: str = ""
        self.revision: int = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def notify_change(self, snapshot: SourceTriple) -> None:
        """Record the latest state and (re)start the quiescence timer."""
        if self._closed:
            return
        self._snapshot = dict(snapshot)
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._scheduler.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Rebuild now if a rebuild is pending."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def close(self) -> None:
        """Cancel any armed timer; later changes are ignored."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._closed = True

    def _fire(self) -> None:
        # Clear the handle first so a change made by on_render re-arms cleanly.
        self._handle = None
        if self._closed or self._snapshot is None:
            return
        self.document = build_document(self._snapshot)
        self.revision += 1
        if self._on_render is not None:
            try:
                self._on_render(self.document)
            except OSError as exc:
                print(f"[Aether] Could not publish preview revision {self.revision}: {exc}", file=sys.stderr)
