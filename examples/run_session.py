#!/usr/bin/env python3
"""
Run the sharing demo session locally.

Shows the audit log alice sees after bob's read, without going through
the CLI.
"""

import sys
from pathlib import Path

# Add assetvault to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from assetvault import Dispatcher, Session, VaultConfig


def main():
    session_path = Path(__file__).parent / "sharing_session.yaml"
    if not session_path.exists():
        print(f"Session not found: {session_path}")
        return 1

    session = Session.from_file(session_path)
    config = VaultConfig.from_file(Path(__file__).parent / "vault.yaml")
    registry = config.build_registry()

    print(f"Session: {session.name}")
    print(f"Calls: {len(session.calls)}")
    print()

    result = session.run(Dispatcher(registry))

    for outcome in result.outcomes:
        mark = "ok " if outcome.matched else "!! "
        print(f"{mark}{outcome.call.operation:<12} -> {outcome.outcome}")
        if outcome.call.operation == "audit_log" and outcome.outcome == "ok":
            for entry in outcome.result["ok"]:
                print(f"      read by {entry['reader']} at t={entry['timestamp']}")

    print()
    print(f"All expectations met: {result.all_matched}")
    print(f"Assets left: {len(registry)}")
    return 0 if result.all_matched else 1


if __name__ == "__main__":
    sys.exit(main())
