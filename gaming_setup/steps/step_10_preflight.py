from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import is_root, require_root, require_tools
from ..lib.pkg import ensure_index_queryable

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        root = is_root()
        if dry_run and not root:
            logger.info("Dry run as non-root: privileged commands are only logged")
        else:
            require_root()

        require_tools()
        ensure_index_queryable()

        state.setdefault("execution", {}).setdefault("decisions", {})["root"] = root
        logger.info("Preflight passed (root=%s dry_run=%s)", root, dry_run)
        return state
