"""Instruction checks run before a generation request reaches the service."""


def validate_instruction(instruction: str) -> str:
    """Normalize a user instruction for the generation client.

    Surrounding whitespace is dropped. An instruction with nothing left to
    send (or one that is not text at all) is rejected with ValueError, so
    the orchestrator never starts a request for it.
    """
    if not isinstance(instruction, str) or not instruction.strip():
        raise ValueError("Instruction must be a non-empty string.")
    return instruction.strip()
