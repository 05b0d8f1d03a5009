"""Error records and the error sink for jschema.

Validation findings are plain data: every constraint violation becomes a
Violation, appended in emission order to the ErrorSink of the current run.
Nothing about a non-conforming *value* is ever raised.

The only exception type in the package is InvalidSchemaError, raised when
the *schema* itself cannot be used.
"""

import decimal
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from jschema.types import ERROR_MESSAGES, ErrorCode


def format_value(value: Any) -> str:
    """Render ``expected``/``received`` for an error string.

    Strings and numbers keep their native form; lists, mappings, booleans
    and null render as JSON.

    Examples:
        >>> format_value(5)
        '5'
        >>> format_value(["string", "number"])
        '["string", "number"]'
        >>> format_value(True)
        'true'
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, decimal.Decimal)) and not isinstance(value, bool):
        return str(value)
    return json.dumps(value, default=str, sort_keys=False)


@dataclass(frozen=True)
class Violation:
    """One constraint violation found during a validation run.

    Attributes:
        path: Dot-notation path of the offending value ("" for the root)
        code: Which constraint category failed
        message: Human-readable error head (e.g. "invalid type")
        expected: Optional - what the schema asked for
        received: Optional - what the value actually had

    Examples:
        >>> v = Violation(
        ...     path="age",
        ...     code=ErrorCode.MINIMUM,
        ...     message="minimum value exceeded",
        ...     expected=0,
        ...     received=-5,
        ... )
        >>> v.format()
        'minimum value exceeded at age, expected: 0, received: -5'
    """
    path: str
    code: ErrorCode
    message: str
    expected: Optional[Any] = None
    received: Optional[Any] = None

    def format(self) -> str:
        """Flatten to ``<message>[ at <path>][, expected: ..][, received: ..]``."""
        out = self.message
        if self.path:
            out = f"{out} at {self.path}"
        if self.expected is not None:
            out = f"{out}, expected: {format_value(self.expected)}"
        if self.received is not None:
            out = f"{out}, received: {format_value(self.received)}"
        return out

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "path": self.path,
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message,
        }
        if self.expected is not None:
            result["expected"] = self.expected
        if self.received is not None:
            result["received"] = self.received
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Violation":
        """Create Violation from dict."""
        code = data["code"]
        if isinstance(code, str):
            code = ErrorCode(code)
        return cls(
            path=data["path"],
            code=code,
            message=data["message"],
            expected=data.get("expected"),
            received=data.get("received"),
        )


@dataclass
class ErrorSink:
    """Ordered, append-only log of violations for one validation run.

    A fresh sink is created per top-level run; scratch sinks are also used
    to probe nested-schema type matches without leaking their findings.
    """
    violations: List[Violation] = field(default_factory=list)

    def add(
        self,
        path: str,
        code: ErrorCode,
        expected: Optional[Any] = None,
        received: Optional[Any] = None,
        message: Optional[str] = None,
    ) -> Violation:
        violation = Violation(
            path=path,
            code=code,
            message=message or ERROR_MESSAGES[code],
            expected=expected,
            received=received,
        )
        self.violations.append(violation)
        return violation

    @property
    def count(self) -> int:
        return len(self.violations)

    def messages(self) -> List[str]:
        return [violation.format() for violation in self.violations]

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)


class InvalidSchemaError(Exception):
    """Raised when a schema cannot be used for validation.

    Attributes:
        problems: Every problem found, one string each
    """

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        summary = "; ".join(self.problems) if self.problems else "invalid schema"
        super().__init__(f"Invalid schema: {summary}")


__all__ = [
    "format_value",
    "Violation",
    "ErrorSink",
    "InvalidSchemaError",
]
