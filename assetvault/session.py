# assetvault/session.py
"""
Scripted registry sessions.

A session is a YAML list of calls run in order against a fresh registry.
Each call names one operation and may state the expected outcome:

    name: sharing demo
    calls:
      - register: {owner: alice, name: doc, content: [1, 2, 3]}
        expect: ok
      - share: {id: 1, owner: alice, recipient: bob}
      - read: {id: 1, caller: carol}
        expect: Forbidden

``expect`` is ``ok`` or an error kind (InvalidInput, NotFound, Forbidden,
NotShared). Calls without ``expect`` always match.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .dispatch import OPERATIONS, Dispatcher
from .errors import ERROR_KINDS

logger = logging.getLogger(__name__)

EXPECTATIONS = ("ok",) + ERROR_KINDS


@dataclass
class SessionCall:
    """One scripted call."""
    operation: str
    args: Dict[str, Any]
    expect: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, index: int) -> "SessionCall":
        if not isinstance(data, dict):
            raise ValueError(f"Call #{index}: expected a mapping, got {type(data).__name__}")
        data = dict(data)
        expect = data.pop("expect", None)
        if expect is not None and expect not in EXPECTATIONS:
            raise ValueError(f"Call #{index}: invalid expect {expect!r}")
        if len(data) != 1:
            raise ValueError(f"Call #{index}: expected exactly one operation, got {sorted(data)}")
        operation, args = next(iter(data.items()))
        if operation not in OPERATIONS:
            raise ValueError(f"Call #{index}: unknown operation {operation!r}")
        if args is None:
            args = {}
        if not isinstance(args, dict):
            raise ValueError(f"Call #{index}: arguments for {operation} must be a mapping")
        return cls(operation=operation, args=args, expect=expect)


@dataclass
class CallOutcome:
    """Result of running one SessionCall."""
    call: SessionCall
    result: Dict[str, Any]

    @property
    def outcome(self) -> str:
        """``ok`` or the error kind."""
        if "ok" in self.result:
            return "ok"
        return self.result["err"]["kind"]

    @property
    def matched(self) -> bool:
        return self.call.expect is None or self.call.expect == self.outcome

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.call.operation,
            "args": self.call.args,
            "expect": self.call.expect,
            "result": self.result,
            "matched": self.matched,
        }


@dataclass
class SessionResult:
    """All outcomes of a session run."""
    name: str
    outcomes: List[CallOutcome] = field(default_factory=list)

    @property
    def all_matched(self) -> bool:
        return all(o.matched for o in self.outcomes)

    @property
    def failures(self) -> List[CallOutcome]:
        return [o for o in self.outcomes if not o.matched]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "all_matched": self.all_matched,
            "calls": [o.to_dict() for o in self.outcomes],
        }

    def to_json(self) -> str:
        # Echoed args may hold YAML scalars (dates, binary) json cannot encode.
        return json.dumps(self.to_dict(), indent=2, default=str)


@dataclass
class Session:
    """A named, ordered list of calls."""
    name: str
    calls: List[SessionCall]

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Session":
        """Parse session from YAML string."""
        data = yaml.safe_load(yaml_content)
        if not isinstance(data, dict):
            raise ValueError("Session must be a YAML mapping")
        raw_calls = data.get("calls")
        if not isinstance(raw_calls, list):
            raise ValueError("Session needs a 'calls' list")
        calls = [SessionCall.from_dict(c, i) for i, c in enumerate(raw_calls, start=1)]
        return cls(name=str(data.get("name", "session")), calls=calls)

    @classmethod
    def from_file(cls, path: Path | str) -> "Session":
        """Load session from YAML file."""
        with open(path, "r") as f:
            return cls.from_yaml(f.read())

    def run(self, dispatcher: Dispatcher) -> SessionResult:
        """Run every call in order. Later calls see earlier calls' effects."""
        result = SessionResult(name=self.name)
        for call in self.calls:
            outcome = CallOutcome(call=call, result=dispatcher.call(call.operation, call.args))
            if not outcome.matched:
                logger.warning(
                    f"{call.operation}: expected {call.expect}, got {outcome.outcome}"
                )
            result.outcomes.append(outcome)
        return result
