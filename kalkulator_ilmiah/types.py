"""Type definitions: command vocabulary, calculator state and result dataclasses."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ValidationError(Exception):
    """Raised when a command cannot be built from the given input."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class _Vocabulary(Enum):
    """Enum whose members can be looked up by label or alias."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, name: Any):
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for member in cls:
            if member.value == key or member.name.lower() == key.lower():
                return member
        alias = cls._aliases().get(key.lower())
        if alias is not None:
            return cls(alias)
        raise ValidationError(f"Unknown {cls._label()}: {name!r}", cls._error_code())

    @classmethod
    def _label(cls) -> str:
        return cls.__name__.lower()

    @classmethod
    def _error_code(cls) -> str:
        return "VALIDATION_ERROR"


class Operator(_Vocabulary):
    """Binary operators. Values are the labels shown in history entries."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    POWER = "^"
    MOD = "mod"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"*": "×", "x": "×", "/": "÷", "%": "mod", "**": "^"}

    @classmethod
    def _error_code(cls) -> str:
        return "UNKNOWN_OPERATOR"


class ScientificFunction(_Vocabulary):
    """Unary scientific functions."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"
    SQUARE = "x²"
    RECIPROCAL = "1/x"
    FACTORIAL = "x!"
    EXP = "e^x"
    POW10 = "10^x"
    ABS = "abs"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {
            "x^2": "x²",
            "sqr": "x²",
            "inv": "1/x",
            "fact": "x!",
            "!": "x!",
            "exp": "e^x",
            "log10": "log",
            "√": "sqrt",
        }

    @classmethod
    def _label(cls) -> str:
        return "function"

    @classmethod
    def _error_code(cls) -> str:
        return "UNKNOWN_FUNCTION"


class Constant(_Vocabulary):
    PI = "π"
    E = "e"

    @classmethod
    def _error_code(cls) -> str:
        return "UNKNOWN_CONSTANT"


class MemoryCommand(_Vocabulary):
    CLEAR = "MC"
    RECALL = "MR"
    ADD = "M+"
    SUBTRACT = "M-"
    STORE = "MS"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"mc": "MC", "mr": "MR", "m+": "M+", "m-": "M-", "ms": "MS"}

    @classmethod
    def _label(cls) -> str:
        return "memory command"

    @classmethod
    def _error_code(cls) -> str:
        return "UNKNOWN_MEMORY_COMMAND"


# ── Commands ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Digit:
    digit: str

    def __post_init__(self) -> None:
        value = str(self.digit)
        if len(value) != 1 or value not in "0123456789":
            raise ValidationError(f"Not a single digit: {self.digit!r}", "INVALID_DIGIT")
        object.__setattr__(self, "digit", value)


@dataclass(frozen=True)
class DecimalPoint:
    pass


@dataclass(frozen=True)
class PressOperator:
    operator: Operator

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", Operator.parse(self.operator))


@dataclass(frozen=True)
class Equals:
    pass


@dataclass(frozen=True)
class PressFunction:
    function: ScientificFunction

    def __post_init__(self) -> None:
        object.__setattr__(self, "function", ScientificFunction.parse(self.function))


@dataclass(frozen=True)
class PressConstant:
    constant: Constant

    def __post_init__(self) -> None:
        object.__setattr__(self, "constant", Constant.parse(self.constant))


@dataclass(frozen=True)
class PressMemory:
    command: MemoryCommand

    def __post_init__(self) -> None:
        object.__setattr__(self, "command", MemoryCommand.parse(self.command))


@dataclass(frozen=True)
class ToggleAngleMode:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class AllClear:
    pass


@dataclass(frozen=True)
class ClearHistory:
    pass


@dataclass(frozen=True)
class RecallHistory:
    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValidationError(
                f"History index must be an integer: {self.index!r}", "INVALID_INDEX"
            )


# Decimal numerals as typed or printed by the calculator, plus its sentinels.
VALUE_TEXT_RE = re.compile(
    r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?|NaN|-?Infinity"
)


@dataclass(frozen=True)
class SetValue:
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not VALUE_TEXT_RE.fullmatch(self.text):
            raise ValidationError(f"Not a number: {self.text!r}", "INVALID_VALUE")


Command = Union[
    Digit,
    DecimalPoint,
    PressOperator,
    Equals,
    PressFunction,
    PressConstant,
    PressMemory,
    ToggleAngleMode,
    Clear,
    AllClear,
    ClearHistory,
    RecallHistory,
    SetValue,
]


# ── State and results ────────────────────────────────────────────


@dataclass(frozen=True)
class CalculatorState:
    """Complete calculator state. Transitions return a new instance."""

    current_value: str = "0"
    previous_value: str = ""
    operation: Operator | None = None
    waiting_for_new_value: bool = False
    memory: float = 0.0
    is_radians: bool = False
    history: tuple[str, ...] = ()


@dataclass
class Snapshot:
    """What a presenter needs to draw the calculator after a command."""

    display_text: str
    pending_expression: str
    memory_indicator_active: bool
    angle_mode_label: str
    history_entries: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "display": self.display_text,
            "pending": self.pending_expression,
            "memory": self.memory_indicator_active,
            "angle_mode": self.angle_mode_label,
            "history": list(self.history_entries),
        }


@dataclass
class CalculationResult:
    """Result of running a token sequence through a fresh engine."""

    ok: bool
    snapshot: Snapshot | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.snapshot is not None:
            result_dict.update(self.snapshot.to_dict())
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"CalculationResult(ok=False, error={self.error!r}, code={self.code!r})"
        return f"CalculationResult(ok=True, snapshot={self.snapshot!r})"
