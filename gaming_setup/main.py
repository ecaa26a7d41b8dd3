from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .config import SetupConfig, apply_overrides, load_setup_config, toggle_names
from .lib.env import SetupEnvironmentError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .report import new_state, save_report
from .steps import (
    ConfigureReposStep,
    ConfigureServicesStep,
    InstallFlatpaksStep,
    InstallHelpersStep,
    InstallPackagesStep,
    PlanPackagesStep,
    PreflightStep,
    SummaryStep,
    WriteTuningStep,
)

logger = logging.getLogger(__name__)

PLAN_STEP_ID = PlanPackagesStep.step_id


def build_steps(manifest_path: Optional[str] = None):
    return [
        PreflightStep(),
        ConfigureReposStep(),
        InstallHelpersStep(manifest_path),
        PlanPackagesStep(manifest_path),
        InstallPackagesStep(),
        InstallFlatpaksStep(manifest_path),
        ConfigureServicesStep(),
        WriteTuningStep(),
        SummaryStep(),
    ]


def run(
    cfg: SetupConfig,
    *,
    log_path: str = DEFAULT_LOG_PATH,
    report_path: Optional[str] = None,
    stop_after: Optional[str] = None,
    manifest_path: Optional[str] = None,
    steps=None,
) -> Dict[str, Any]:
    """Run the setup pipeline once and return the run state."""

    actual_log_path = configure_logging(log_path=log_path)

    state = new_state(cfg.to_dict())
    state["execution"]["log_path"] = actual_log_path
    logger.info("Starting gaming setup (auto_update=%s dry_run=%s)", cfg.auto_update, cfg.dry_run)

    try:
        result = run_pipeline(
            state=state,
            steps=steps if steps is not None else build_steps(manifest_path),
            stop_after=stop_after,
        )
        state = result.state
        state["execution"]["ran_steps"] = result.ran_steps
        return state
    except Exception as e:
        logger.exception("Gaming setup failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if report_path:
            save_report(report_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="gaming-setup")
    p.add_argument("--config", default=None, help="YAML file with toggles (see SetupConfig)")
    p.add_argument("--enable", action="append", default=[], choices=toggle_names(), metavar="TOGGLE")
    p.add_argument("--disable", action="append", default=[], choices=toggle_names(), metavar="TOGGLE")
    p.add_argument("--manifest", default=None, help="Package catalog YAML (default: bundled manifests/packages.yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to setup log")
    p.add_argument("--report", default=None, help="Write a run report (json|yaml)")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without executing them")
    p.add_argument("--plan-only", action="store_true", help=f"Stop after {PLAN_STEP_ID}")
    p.add_argument(
        "--stop-after",
        default=None,
        choices=[s.step_id for s in build_steps()],
        help="Stop after step_id (e.g. 50_install_packages)",
    )

    args = p.parse_args(argv)

    try:
        cfg = apply_overrides(
            load_setup_config(args.config),
            enable=args.enable,
            disable=args.disable,
            dry_run=True if args.dry_run else None,
        )
    except (OSError, ValueError, RuntimeError) as e:
        p.exit(1, f"gaming-setup: invalid config: {e}\n")

    try:
        run(
            cfg,
            log_path=args.log,
            report_path=args.report,
            manifest_path=args.manifest,
            stop_after=PLAN_STEP_ID if args.plan_only else args.stop_after,
        )
    except SetupEnvironmentError as e:
        logger.error("%s", e)
        return 1
    return 0
