"""Source State: the markup/style/logic triple, the single source of truth for the preview."""

import json
from typing import NotRequired, TypedDict

FIELDS = ("markup", "style", "logic")


class SourceTriple(TypedDict):
    markup: str  # HTML body content (no html/head/body tags).
    style: str  # Raw CSS.
    logic: str  # JavaScript run inside the preview.


class GenerationResponse(TypedDict):
    markup: str
    style: str
    logic: str
    explanation: NotRequired[str]  # Informational only, never rendered.


SEED_STATE: SourceTriple = {
    "markup": (
        '<div class="card">\n'
        '  <div class="glow"></div>\n'
        "  <h2>Aether</h2>\n"
        "  <p>Future of Coding</p>\n"
        "</div>"
    ),
    "style": (
        "body {\n"
        "  background: #000;\n"
        "  color: white;\n"
        "  display: flex;\n"
        "  justify-content: center;\n"
        "  align-items: center;\n"
        "  height: 100vh;\n"
        "}\n"
        "\n"
        ".card {\n"
        "  position: relative;\n"
        "  padding: 40px;\n"
        "  background: rgba(255,255,255,0.05);\n"
        "  border-radius: 20px;\n"
        "  backdrop-filter: blur(10px);\n"
        "  border: 1px solid rgba(255,255,255,0.1);\n"
        "  overflow: hidden;\n"
        "}\n"
        "\n"
        "h2 {\n"
        "  font-size: 2.5rem;\n"
        "  margin: 0;\n"
        "  background: linear-gradient(to right, #06b6d4, #8b5cf6);\n"
        "  -webkit-background-clip: text;\n"
        "  -webkit-text-fill-color: transparent;\n"
        "}"
    ),
    "logic": (
        "console.log('Aether Code initialized...');\n"
        "\n"
        "const card = document.querySelector('.card');\n"
        "card.addEventListener('mousemove', (e) => {\n"
        "  // Add interactive hover logic here\n"
        "});"
    ),
}


def _check_value(name: str, value) -> None:
    if name not in FIELDS:
        raise KeyError(f"Unknown source field '{name}'. Must be one of: {FIELDS}")
    if not isinstance(value, str):
        raise TypeError(f"Source field '{name}' must be a string, got {type(value).__name__}.")


def serialize_state(triple: SourceTriple) -> str:
    """Serialize a triple as the JSON context sent along with generation requests."""
    return json.dumps({name: triple[name] for name in FIELDS}, indent=2)


class SourceState:
    """Mutable holder for the current triple.

    ``set_field`` is the only mutation path for manual edits and
    ``replace_all`` the only one for generation results.
    """

    def __init__(self, initial: SourceTriple | None = None):
        initial = SEED_STATE if initial is None else initial
        for name in FIELDS:
            _check_value(name, initial.get(name))
        self._fields: SourceTriple = {name: initial[name] for name in FIELDS}

    def get(self) -> SourceTriple:
        """Return a copy of the current triple."""
        return {name: self._fields[name] for name in FIELDS}

    def set_field(self, name: str, value: str) -> None:
        """Replace exactly one field, leaving the other two untouched."""
        _check_value(name, value)
        self._fields[name] = value

    def replace_all(self, triple: SourceTriple) -> None:
        """Overwrite all three fields at once.

        Every field is checked before anything is written, so a bad triple
        leaves the state as it was. Extra keys such as ``explanation`` are ignored.
        """
        for name in FIELDS:
            _check_value(name, triple.get(name))
        self._fields = {name: triple[name] for name in FIELDS}

    def to_json(self) -> str:
        return serialize_state(self._fields)
