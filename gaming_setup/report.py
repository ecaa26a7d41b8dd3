from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def new_state(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fresh per-run state shared by the steps. Never read back from disk."""

    return {
        "config": dict(config),
        "execution": {
            "current_step": None,
            "decisions": {},
            "warnings": [],
            "errors": [],
        },
    }


def add_warning(state: Dict[str, Any], message: str, **details: Any) -> None:
    logger.warning(message)
    entry: Dict[str, Any] = {"message": message}
    entry.update(details)
    state.setdefault("execution", {}).setdefault("warnings", []).append(entry)


def save_report(path: str, state: Dict[str, Any]) -> None:
    """Write the run report for the operator (JSON, or YAML by extension)."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(p)
    if fmt in {"yaml", "yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("YAML report requested but PyYAML is not available.") from e
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Run report written to %s", str(p))
