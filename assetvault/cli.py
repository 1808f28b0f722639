#!/usr/bin/env python3
"""
Asset Vault CLI

Drives an in-memory registry from a scripted session:
  assetvault run - Run a YAML session against a fresh registry
  assetvault operations - List the registry operations

Usage:
  assetvault run <session.yaml> [--config <config.yaml>] [-o <results.json>] [-v]
  assetvault operations
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import VaultConfig
from .dispatch import OPERATIONS, Dispatcher
from .session import CallOutcome, Session


def _describe(outcome: CallOutcome) -> str:
    result = outcome.result
    if "ok" in result:
        value = result["ok"]
        if isinstance(value, list):
            return f"ok ({len(value)} items)"
        if isinstance(value, dict):
            return f"ok ({value.get('name')})"
        return f"ok: {value}"
    err = result["err"]
    return f"{err['kind']}: {err['message']}"


def cmd_run(args) -> int:
    """Run a session file."""
    config = VaultConfig.from_file(args.config) if args.config else VaultConfig()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    session = Session.from_file(Path(args.session))
    print(f"Session: {session.name}")
    print(f"Calls: {len(session.calls)}")
    print()

    dispatcher = Dispatcher(config.build_registry())
    result = session.run(dispatcher)

    for i, outcome in enumerate(result.outcomes, start=1):
        status = "PASS" if outcome.matched else "FAIL"
        if outcome.call.expect is None:
            status = "----"
        print(f"  [{status}] {i:>3} {outcome.call.operation}: {_describe(outcome)}")

    if args.output:
        output_path = Path(args.output)
        payload = result.to_json()
        with open(output_path, "w") as f:
            f.write(payload)
        print(f"\nResults saved to: {output_path}")

    failures = result.failures
    print(f"\n=== Complete ===")
    print(f"Matched: {len(result.outcomes) - len(failures)}/{len(result.outcomes)}")
    return 0 if not failures else 1


def cmd_operations(args) -> int:
    """Print the operation names and their arguments."""
    for name, params in OPERATIONS.items():
        print(f"{name}({', '.join(params)})")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="assetvault",
        description="Asset Vault - access-controlled asset registry",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Run a YAML session against a fresh registry")
    run_parser.add_argument("session", help="Session YAML file")
    run_parser.add_argument("--config", help="Registry config YAML file")
    run_parser.add_argument("-o", "--output", help="Write JSON results to this file")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers.add_parser("operations", help="List registry operations")

    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "operations":
        return cmd_operations(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
