"""Isolated rendering surface: hosts a preview document in a sandboxed frame.

The frame is granted script execution and nothing else: no same-origin
access (so no parent DOM, cookies or storage), no top navigation, no forms,
no popups, no modals.
"""

import html
from pathlib import Path

SANDBOX_CAPABILITIES = ("allow-scripts",)

# Capabilities that must never be granted to the preview frame.
DENIED_CAPABILITIES = (
    "allow-same-origin",
    "allow-top-navigation",
    "allow-forms",
    "allow-popups",
    "allow-modals",
)

_HOST_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
    html, body {{ margin: 0; height: 100%; background: #0f172a; }}
    iframe {{ display: block; width: 100%; height: 100%; border: none; background: white; }}
  </style>
</head>
<body>
  {frame}
</body>
</html>
"""


def render_frame(document: str, title: str = "preview") -> str:
    """Return an <iframe> element that renders ``document`` in isolation.

    The document is embedded through ``srcdoc``, attribute-escaped, so it
    never becomes part of the host page's own markup.
    """
    sandbox = " ".join(SANDBOX_CAPABILITIES)
    return (
        f'<iframe title="{html.escape(title)}" sandbox="{sandbox}" '
        f'referrerpolicy="no-referrer" srcdoc="{html.escape(document, quote=True)}"></iframe>'
    )


def render_host_page(document: str, title: str = "Aether Preview") -> str:
    """Wrap the sandboxed frame in a minimal full-window host page."""
    return _HOST_PAGE.format(title=html.escape(title), frame=render_frame(document))


def write_preview(document: str, path: Path) -> Path:
    """Write the host page for ``document`` to ``path``, replacing any previous one."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_host_page(document), encoding="utf-8")
    return path
