from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, setup_logging
from ..services.actions import ACTIONS, WorkflowContext, run_action
from ..services.summary import render_summary_line
from ..store.base import StoreError
from ..store.workbook import WorkbookTableStore

"""CLI entrypoint: one sub-command per menu action.

    order-workflow approve             # "Approve Checked Items"
    order-workflow download            # "Download Approved Items as CSV"
    order-workflow send                # "Send Approved Items to Server"
    order-workflow refresh-requested   # rebuild "Requested" from "Raw Responses"

Flow:
- load .env (overrides existing environment variables)
- load config/workflow.yml
- open the workbook
- run the action; its message is the "dialog", followed by a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ACTION_FAILED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a missing file is not an error."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="order-workflow",
        description="Requested -> Approved -> Ordered sheet workflow",
    )
    p.add_argument("command", choices=sorted(ACTIONS), help="Menu action to run")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config YAML path")
    p.add_argument("--env-file", type=Path, default=Path(".env"), help="dotenv file to load first")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # None のときのみ sys.argv を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(args.env_file, override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    workbook = Path(cfg.workbook)
    try:
        store = WorkbookTableStore.open(workbook)
    except StoreError as e:
        logger.error(f"workbook: {e}")
        return EXIT_FATAL

    logger.debug(f"workbook: {workbook} sheets={store.table_names()}")
    ctx = WorkflowContext(store=store, config=cfg)
    result = run_action(args.command, ctx)

    log_path = ctx.error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    return EXIT_SUCCESS if result.ok else EXIT_ACTION_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
