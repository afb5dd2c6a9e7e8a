"""JSON file input/output helpers"""
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json_file(file_path: str | Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not valid JSON
    """
    path = Path(file_path).resolve()

    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {file_path}: {e}") from e


def write_json_file(file_path: str | Path, data: Any, pretty: bool = True) -> Path:
    """Write ``data`` as JSON, creating parent directories."""
    path = Path(file_path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)
    path.write_text(content, encoding="utf-8")

    logger.info(f"File written: {path}")
    return path


def read_json_files(file_paths: list[str | Path]) -> list[dict[str, Any]]:
    """Read several files; one failing file does not stop the others."""
    results = []

    for file_path in file_paths:
        try:
            data = read_json_file(file_path)
            results.append({"success": True, "data": data, "file_path": str(file_path)})
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {file_path}: {e}")
            results.append({"success": False, "error": str(e), "file_path": str(file_path)})

    return results
