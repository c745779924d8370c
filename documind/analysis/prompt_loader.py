import json
from pathlib import Path

from documind.ai.exceptions import ModelServiceError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

ANALYSIS_INSTRUCTION = "analysis_instruction.txt"
ANALYSIS_SCHEMA = "analysis_schema.json"
SIMILARITY_INSTRUCTION = "similarity_instruction.txt"
SIMILARITY_SCHEMA = "similarity_schema.json"
CHAT_SEED_INSTRUCTION = "chat_seed_instruction.txt"


def load_instruction(name: str, path: Path | None = None) -> str:
    """Load an instruction text.

    Args:
        name: File name inside the bundled prompts directory.
        path: Explicit file to read instead of the bundled one.

    Returns:
        The instruction with surrounding whitespace removed.

    Raises:
        ModelServiceError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ModelServiceError(f"Failed to load instruction: {exc}") from exc


def load_json_schema(name: str, path: Path | None = None) -> dict[str, object]:
    """Load an output JSON schema.

    Raises:
        ModelServiceError: if the file cannot be read or is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelServiceError(f"Failed to load JSON schema: {exc}") from exc
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ModelServiceError(f"Invalid JSON schema {path.name}: {exc}") from exc
    if not isinstance(schema, dict):
        raise ModelServiceError(f"JSON schema {path.name} must be an object")
    return schema
