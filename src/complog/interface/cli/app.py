from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: diagnostic logging setup, selection and
compilation of the logging configuration, and the requested actions
(hierarchy dump, test record emission).
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from complog.bootstrap import bootstrap
from complog.core.registry import LoggerRegistry
from complog.domain.errors import ComplogConfigError
from complog.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, registry: Optional[LoggerRegistry] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        registry: Registry to compile into. Defaults to a private one.

    Returns:
        int: Process exit code (0 success, 2 invalid configuration).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostic logging for the tool itself (stderr)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s | %(message)s",
        stream=sys.stderr,
    )

    # 3. Configuration compilation
    reg = registry or LoggerRegistry()
    environ = cli_args.args_to_environ(args, os.environ)
    try:
        bootstrap(reg, environ)
    except ComplogConfigError as e:
        logger.debug("Configuration rejected", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # 4. Actions
    if args.emit:
        component, level, message = args.emit
        try:
            reg.get(component).log(level, message)
        except ComplogConfigError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2

    snapshot = reg.describe()
    if args.dump:
        if args.json_output:
            print(json.dumps(snapshot, ensure_ascii=False, indent=2))
        else:
            _print_human_summary(snapshot)
    elif not args.emit:
        print(f"Configuration OK: {len(snapshot['loggers'])} logger(s) compiled.")

    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(snapshot: Dict[str, Any]) -> None:
    """Print one line per logger of a registry snapshot."""
    print(f"Logger hierarchy (generation {snapshot['generation']}):")
    for entry in snapshot["loggers"]:
        level = entry["level"] or f"({entry['effective_level']})"
        appenders = ", ".join(entry["appenders"]) or "-"
        parent = entry["parent"] or "-"
        flag = "" if entry["additive"] else "  [non-additive]"
        print(f"  {entry['name']:<30} level={level:<10} parent={parent:<20} -> {appenders}{flag}")
