#!/usr/bin/env python3
"""
Command-line entry point.

Usage:
    sourcify-verify run sourcify MetaCoin@0x... [ConvertLib@0x... ...] --network goerli [--debug]

Options:
    --network NAME            network entry of the project configuration (default: development)
    --config FILE             project configuration (default: <working dir>/truffle-config.json)
    --working-directory DIR   Truffle project root (default: current directory)
    --env FILE                extra .env file to load
    --debug                   verbose logging, including the request payload
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..config.build_config import load_build_config
from ..config.settings import load_env
from ..helpers.util import ConfigError, abort
from ..verify.runner import run

logger = logging.getLogger(__name__)

PLUGINS = ("sourcify",)


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser whose usage errors exit with code 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        abort(f"{self.prog}: error: {message}", logger)


def build_parser() -> argparse.ArgumentParser:
    p = ArgumentParser(prog="sourcify-verify", description="Verify Truffle contracts on Sourcify")
    subparsers = p.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run a verification plugin")
    run_parser.add_argument("plugin", choices=PLUGINS, help="Plugin to run")
    run_parser.add_argument("contracts", nargs="*", help="ContractName@address pairs")
    run_parser.add_argument("--network", default="development", help="Network name from the project configuration")
    run_parser.add_argument("--config", dest="config_file", default=None, help="Path to the project configuration file")
    run_parser.add_argument("--working-directory", dest="working_directory", default=None, help="Project root directory")
    run_parser.add_argument("--env", dest="env_file", default=None, help="Path to .env file to load")
    run_parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    if not args.command:
        parser.print_help()
        return 1

    load_env(args.env_file)

    try:
        config = load_build_config(
            args.network,
            [args.plugin, *args.contracts],
            working_directory=args.working_directory,
            config_file=args.config_file,
            debug=args.debug,
        )
    except ConfigError as e:
        abort(str(e), logger)

    return run(config)


if __name__ == "__main__":
    raise SystemExit(main())
