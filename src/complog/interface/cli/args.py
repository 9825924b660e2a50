from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema of the ``complog`` tool: which logging
configuration to compile and what to do with the resulting hierarchy.
"""

import argparse
from typing import Dict, Mapping, Optional

from complog.bootstrap import ENV_DEBUG, ENV_LOG_CONFIG

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the complog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="complog",
        description="Compile a component logging configuration and inspect the result.",
    )

    # --- Configuration Source ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help=f"Path to a JSON logging configuration (default: ${ENV_LOG_CONFIG}).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=f"Use the built-in debug configuration when no file is given (same as ${ENV_DEBUG}).",
    )

    # --- Actions ---
    p.add_argument(
        "--dump",
        action="store_true",
        help="Print the compiled logger hierarchy.",
    )
    p.add_argument(
        "--emit",
        nargs=3,
        metavar=("COMPONENT", "LEVEL", "MESSAGE"),
        default=None,
        help="Send one record through the compiled hierarchy.",
    )

    # --- Format Selection & Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the hierarchy dump as JSON.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show the tool's own diagnostic messages.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_environ(args: argparse.Namespace, environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Overlay command-line choices on the process environment.

    Args:
        args: Parsed command-line arguments.
        environ: Base environment.

    Returns:
        Dict[str, str]: Environment view used to select the config source.
    """
    env = dict(environ)
    config_path: Optional[str] = args.config_path
    if config_path:
        env[ENV_LOG_CONFIG] = config_path
    if args.debug:
        env[ENV_DEBUG] = "1"
    return env
