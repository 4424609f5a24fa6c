"""Orchestrator: sole owner of the source state.

Funnels the two mutation paths (manual edits and generation results) through
one object so they never interleave, and notifies the preview compiler after
each mutation.
"""

import sys
from typing import Literal, TypedDict

from aether.config import get_config
from aether.errors import GenerationError, GenerationInFlight
from aether.generation.client import GenerationClient
from aether.preview.compiler import PreviewCompiler
from aether.state import SourceState
from aether.utils.validator import validate_instruction


class GenerationOutcome(TypedDict):
    status: Literal["applied", "failed", "discarded"]
    message: str  # User-facing; empty on success.
    explanation: str  # From the service when applied, otherwise empty.


class Orchestrator:
    def __init__(
        self,
        state: SourceState,
        compiler: PreviewCompiler,
        client: GenerationClient,
        send_context: bool | None = None,
    ):
        if send_context is None:
            send_context = get_config().get("send_context", True)
        self._state = state
        self._compiler = compiler
        self._client = client
        self._send_context = send_context
        self._busy = False
        self._live = True

    @property
    def state(self) -> SourceState:
        return self._state

    @property
    def compiler(self) -> PreviewCompiler:
        return self._compiler

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def live(self) -> bool:
        return self._live

    def edit(self, field: str, value: str) -> None:
        """Apply a manual single-field edit and schedule a preview rebuild."""
        self._state.set_field(field, value)
        self._compiler.notify_change(self._state.get())

    def refresh(self) -> None:
        """Schedule a rebuild of the current state without changing it."""
        self._compiler.notify_change(self._state.get())

    async def request_generation(self, instruction: str, send_context: bool | None = None) -> GenerationOutcome:
        """Run one generation request and, on success, replace the whole state.

        Failures never touch the state. A response that arrives after
        ``close()`` is dropped.
        """
        instruction = validate_instruction(instruction)
        if self._busy:
            raise GenerationInFlight("A generation request is already in progress.")
        if send_context is None:
            send_context = self._send_context

        context = self._state.to_json() if send_context else None

        self._busy = True
        try:
            response = await self._client.generate(instruction, context)
        except GenerationError as exc:
            print(f"[Aether] Generation failed ({type(exc).__name__}): {exc}", file=sys.stderr)
            return {"status": "failed", "message": exc.user_message, "explanation": ""}
        finally:
            self._busy = False

        if not self._live:
            print("[Aether] Discarding generation response: session already closed.", file=sys.stderr)
            return {"status": "discarded", "message": "", "explanation": ""}

        self._state.replace_all(response)
        self._compiler.notify_change(self._state.get())
        return {
            "status": "applied",
            "message": "",
            "explanation": response.get("explanation", ""),
        }

    def close(self) -> None:
        """Tear down: cancel any pending rebuild and ignore late generation results."""
        self._live = False
        self._compiler.close()

