"""Exporter: writes the current triple as one standalone HTML document."""

from pathlib import Path

from aether.config import get_config
from aether.preview.compiler import escape_logic
from aether.state import SourceTriple


def render_export(triple: SourceTriple) -> str:
    """Concatenate style, markup and logic into a standalone document.

    No error guard and no sandbox: the export is meant to be opened directly.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Aether Export</title>
  <style>
    {triple['style']}
  </style>
</head>
<body>
  {triple['markup']}
  <script>
    {escape_logic(triple['logic'])}
  </script>
</body>
</html>
"""


def write_export(triple: SourceTriple, output_path: Path | None = None) -> Path:
    """Write the export to ``output_path`` (default: configured export_path).

    Never overwrites: if the file exists, ``name (2).html``, ``name (3).html``
    and so on are tried. Returns the Path written.
    """
    if output_path is None:
        config = get_config()
        output_path = Path(config.get("export_path", "./output/project.html"))
    output_path = Path(output_path)
    output_dir = output_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = output_path.stem
    suffix = output_path.suffix or ".html"
    target = output_dir / f"{stem}{suffix}"
    counter = 1
    while target.exists():
        counter += 1
        target = output_dir / f"{stem} ({counter}){suffix}"

    target.write_text(render_export(triple), encoding="utf-8")
    return target
