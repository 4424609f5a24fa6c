"""Entry point: live preview, AI generation and export over a workspace directory.

Usage:
    aether generate <instruction...> [--dir DIR] [--fresh]
    aether watch [--dir DIR]
    aether render [--dir DIR]
    aether export [--dir DIR]
"""

import asyncio
import sys
from pathlib import Path

from aether.config import get_config
from aether.generation.client import GenerationClient
from aether.orchestrator import GenerationOutcome, Orchestrator
from aether.preview.compiler import PreviewCompiler, build_document
from aether.preview.sandbox import write_preview
from aether.state import SourceState
from aether.utils.exporter import write_export
from aether.workspace import WorkspaceWatcher, load_workspace, workspace_paths, write_workspace

COMMANDS = ("generate", "watch", "render", "export")


def _preview_path(directory: Path) -> Path:
    return directory / get_config().get("preview_path", "preview.html")


def _build_orchestrator(directory: Path, loop: asyncio.AbstractEventLoop) -> Orchestrator:
    """Wire state, compiler and client for one workspace session."""
    preview_path = _preview_path(directory)

    def _publish(document: str) -> None:
        write_preview(document, preview_path)
        print(f"[Aether] Preview updated: {preview_path}")

    state = SourceState(load_workspace(directory))
    compiler = PreviewCompiler(loop, on_render=_publish)
    return Orchestrator(state, compiler, GenerationClient())


async def generate(instruction: str, directory: Path, fresh: bool = False) -> GenerationOutcome:
    """Run one generation against the workspace and write the result back on success."""
    orchestrator = _build_orchestrator(directory, asyncio.get_running_loop())
    try:
        outcome = await orchestrator.request_generation(instruction, send_context=not fresh)
        if outcome["status"] == "applied":
            write_workspace(directory, orchestrator.state.get())
            orchestrator.compiler.flush()
    finally:
        orchestrator.close()
    return outcome


async def watch(directory: Path) -> None:
    """Rebuild the preview whenever a workspace file changes, until cancelled."""
    if not any(path.exists() for path in workspace_paths(directory).values()):
        write_workspace(directory, load_workspace(directory))
        print(f"[Aether] Seeded workspace: {directory}")

    orchestrator = _build_orchestrator(directory, asyncio.get_running_loop())
    watcher = WorkspaceWatcher(directory, on_edit=orchestrator.edit)

    orchestrator.refresh()
    orchestrator.compiler.flush()
    print(f"[Aether] Watching {directory} (Ctrl+C to stop)")
    try:
        await watcher.run()
    finally:
        watcher.stop()
        orchestrator.close()


def render(directory: Path) -> Path:
    """One-shot build of the preview page, no debounce."""
    return write_preview(build_document(load_workspace(directory)), _preview_path(directory))


def export(directory: Path) -> Path:
    return write_export(load_workspace(directory))


def _pop_option(args: list[str], name: str) -> str | None:
    """Remove ``name VALUE`` from args and return VALUE (None if absent)."""
    if name not in args:
        return None
    index = args.index(name)
    if index + 1 >= len(args):
        raise SystemExit(f"{name} requires a value.")
    value = args[index + 1]
    del args[index:index + 2]
    return value


def main() -> None:
    """CLI entry point."""
    args = sys.argv[1:]
    if not args or args[0] not in COMMANDS:
        print(__doc__.strip())
        raise SystemExit(2)

    command = args.pop(0)
    directory = Path(_pop_option(args, "--dir") or get_config().get("workspace_dir", "./workspace"))

    try:
        _run_command(command, args, directory)
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"[Aether] Could not read workspace {directory}: {exc}")


def _run_command(command: str, args: list[str], directory: Path) -> None:
    if command == "generate":
        fresh = False
        if "--fresh" in args:
            fresh = True
            args.remove("--fresh")

        if args:
            instruction = " ".join(args)
        else:
            print("Describe your vision (Ctrl+D / Ctrl+Z to submit):")
            instruction = sys.stdin.read()

        try:
            outcome = asyncio.run(generate(instruction, directory, fresh=fresh))
        except UnicodeDecodeError:
            # A ValueError subclass, but a workspace read failure.
            raise
        except ValueError as exc:
            raise SystemExit(str(exc))

        if outcome["status"] != "applied":
            print(outcome["message"] or "Generation result discarded.")
            raise SystemExit(1)
        print(f"[Aether] Workspace updated: {directory}")
        if outcome["explanation"]:
            print(outcome["explanation"])

    elif command == "watch":
        try:
            asyncio.run(watch(directory))
        except KeyboardInterrupt:
            print("\n[Aether] Stopped.")

    elif command == "render":
        print(f"[Aether] Preview written to: {render(directory)}")

    elif command == "export":
        print(f"[Aether] Output written to: {export(directory)}")


if __name__ == "__main__":
    main()
