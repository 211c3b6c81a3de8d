"""Calculator engine: a pure state-transition function and a thin wrapper.

``transition(state, command, settings)`` returns the next state and never
mutates its input. ``Engine`` holds the current state and applies commands
one at a time.

Operators evaluate strictly left to right with no precedence: pressing a
second operator while one is pending computes the pending one first, so
``3 + 4 × 2 =`` gives 14, not 11.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, get_args

from . import history
from .arithmetic import apply_function, apply_operator, constant_value, to_number, to_text
from .config import Settings
from .formatting import format_display, pending_expression
from .logging_config import get_logger
from .types import (
    AllClear,
    CalculatorState,
    Clear,
    ClearHistory,
    Command,
    DecimalPoint,
    Digit,
    Equals,
    MemoryCommand,
    PressConstant,
    PressFunction,
    PressMemory,
    PressOperator,
    RecallHistory,
    SetValue,
    Snapshot,
    ToggleAngleMode,
)

logger = get_logger("engine")


def initial_state(settings: Settings | None = None) -> CalculatorState:
    settings = settings or Settings.from_config()
    return CalculatorState(is_radians=settings.start_in_radians)


def _evaluate_pending(state: CalculatorState, settings: Settings) -> float:
    return apply_operator(
        to_number(state.previous_value),
        to_number(state.current_value),
        state.operation,
        ieee_division=settings.ieee_division,
    )


def _digit(state: CalculatorState, command: Digit, settings: Settings) -> CalculatorState:
    if state.waiting_for_new_value:
        return replace(state, current_value=command.digit, waiting_for_new_value=False)
    if state.current_value == "0":
        return replace(state, current_value=command.digit)
    return replace(state, current_value=state.current_value + command.digit)


def _decimal_point(state: CalculatorState, command: DecimalPoint, settings: Settings) -> CalculatorState:
    if state.waiting_for_new_value:
        return replace(state, current_value="0.", waiting_for_new_value=False)
    if "." in state.current_value:
        return state
    return replace(state, current_value=state.current_value + ".")


def _operator(state: CalculatorState, command: PressOperator, settings: Settings) -> CalculatorState:
    if state.previous_value == "" or state.operation is None:
        return replace(
            state,
            previous_value=state.current_value,
            operation=command.operator,
            waiting_for_new_value=True,
        )
    result = to_text(_evaluate_pending(state, settings))
    return replace(
        state,
        current_value=result,
        previous_value=result,
        operation=command.operator,
        waiting_for_new_value=True,
    )


def _equals(state: CalculatorState, command: Equals, settings: Settings) -> CalculatorState:
    if state.operation is None or state.previous_value == "":
        return state
    result = to_text(_evaluate_pending(state, settings))
    entry = (
        f"{state.previous_value} {state.operation.value} {state.current_value}"
        f"{history.SEPARATOR}{result}"
    )
    return replace(
        state,
        current_value=result,
        previous_value="",
        operation=None,
        waiting_for_new_value=True,
        history=history.push(state.history, entry, settings.history_limit),
    )


def _function(state: CalculatorState, command: PressFunction, settings: Settings) -> CalculatorState:
    # Pending operation stays in place; the result becomes its right operand.
    result = to_text(
        apply_function(
            command.function,
            to_number(state.current_value),
            radians=state.is_radians,
            ieee_division=settings.ieee_division,
        )
    )
    entry = f"{command.function.value}({state.current_value}){history.SEPARATOR}{result}"
    return replace(
        state,
        current_value=result,
        waiting_for_new_value=True,
        history=history.push(state.history, entry, settings.history_limit),
    )


def _constant(state: CalculatorState, command: PressConstant, settings: Settings) -> CalculatorState:
    return replace(
        state,
        current_value=to_text(constant_value(command.constant)),
        waiting_for_new_value=True,
    )


def _memory(state: CalculatorState, command: PressMemory, settings: Settings) -> CalculatorState:
    value = to_number(state.current_value)
    if command.command is MemoryCommand.CLEAR:
        return replace(state, memory=0.0)
    if command.command is MemoryCommand.RECALL:
        return replace(state, current_value=to_text(state.memory), waiting_for_new_value=True)
    if command.command is MemoryCommand.ADD:
        return replace(state, memory=state.memory + value)
    if command.command is MemoryCommand.SUBTRACT:
        return replace(state, memory=state.memory - value)
    if command.command is MemoryCommand.STORE:
        return replace(state, memory=value)
    raise TypeError(f"Unhandled memory command: {command.command!r}")


def _toggle_angle_mode(state: CalculatorState, command: ToggleAngleMode, settings: Settings) -> CalculatorState:
    return replace(state, is_radians=not state.is_radians)


def _clear(state: CalculatorState, command: Clear, settings: Settings) -> CalculatorState:
    return replace(
        state,
        current_value="0",
        previous_value="",
        operation=None,
        waiting_for_new_value=False,
    )


def _all_clear(state: CalculatorState, command: AllClear, settings: Settings) -> CalculatorState:
    return replace(_clear(state, Clear(), settings), history=history.clear())


def _clear_history(state: CalculatorState, command: ClearHistory, settings: Settings) -> CalculatorState:
    return replace(state, history=history.clear())


def _recall_history(state: CalculatorState, command: RecallHistory, settings: Settings) -> CalculatorState:
    if not 0 <= command.index < len(state.history):
        return state
    value = history.recall(state.history[command.index])
    if value is None:
        return state
    return _set_value(state, SetValue(value), settings)


def _set_value(state: CalculatorState, command: SetValue, settings: Settings) -> CalculatorState:
    return replace(state, current_value=command.text, waiting_for_new_value=True)


_HANDLERS: dict[type, Callable[[CalculatorState, Command, Settings], CalculatorState]] = {
    Digit: _digit,
    DecimalPoint: _decimal_point,
    PressOperator: _operator,
    Equals: _equals,
    PressFunction: _function,
    PressConstant: _constant,
    PressMemory: _memory,
    ToggleAngleMode: _toggle_angle_mode,
    Clear: _clear,
    AllClear: _all_clear,
    ClearHistory: _clear_history,
    RecallHistory: _recall_history,
    SetValue: _set_value,
}

_unhandled = [cls.__name__ for cls in get_args(Command) if cls not in _HANDLERS]
if _unhandled:
    raise RuntimeError(f"No handler for command type(s): {', '.join(_unhandled)}")


def transition(
    state: CalculatorState, command: Command, settings: Settings | None = None
) -> CalculatorState:
    """Apply one command to a state and return the resulting state.

    Args:
        state: Current state (left untouched)
        command: Command to apply
        settings: Numeric policy and history limit (defaults to Settings.from_config())

    Returns:
        The next state. Commands whose preconditions do not hold return
        ``state`` itself.

    Raises:
        TypeError: ``command`` is not one of the command types
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {command!r}")
    return handler(state, command, settings or Settings.from_config())


def snapshot(state: CalculatorState) -> Snapshot:
    """Build the presenter view of a state."""
    return Snapshot(
        display_text=format_display(state.current_value),
        pending_expression=pending_expression(state),
        memory_indicator_active=state.memory != 0,
        angle_mode_label="RAD" if state.is_radians else "DEG",
        history_entries=list(state.history),
    )


class Engine:
    """Holds the current calculator state and applies commands to it."""

    def __init__(
        self,
        settings: Settings | None = None,
        state: CalculatorState | None = None,
    ):
        self.settings = settings or Settings.from_config()
        self.state = state if state is not None else initial_state(self.settings)

    def dispatch(self, command: Command) -> CalculatorState:
        logger.debug("Dispatching %r", command)
        self.state = transition(self.state, command, self.settings)
        return self.state

    def dispatch_all(self, commands: Iterable[Command]) -> CalculatorState:
        for command in commands:
            self.dispatch(command)
        return self.state

    def snapshot(self) -> Snapshot:
        return snapshot(self.state)

    # ── Command shortcuts ────────────────────────────────────────

    def digit(self, digit: str) -> CalculatorState:
        return self.dispatch(Digit(digit))

    def decimal(self) -> CalculatorState:
        return self.dispatch(DecimalPoint())

    def operator(self, operator) -> CalculatorState:
        return self.dispatch(PressOperator(operator))

    def equals(self) -> CalculatorState:
        return self.dispatch(Equals())

    def function(self, name) -> CalculatorState:
        return self.dispatch(PressFunction(name))

    def constant(self, name) -> CalculatorState:
        return self.dispatch(PressConstant(name))

    def memory(self, command) -> CalculatorState:
        return self.dispatch(PressMemory(command))

    def toggle_angle_mode(self) -> CalculatorState:
        return self.dispatch(ToggleAngleMode())

    def clear(self) -> CalculatorState:
        return self.dispatch(Clear())

    def all_clear(self) -> CalculatorState:
        return self.dispatch(AllClear())

    def clear_history(self) -> CalculatorState:
        return self.dispatch(ClearHistory())

    def recall_history(self, index: int) -> CalculatorState:
        return self.dispatch(RecallHistory(index))

    def set_value(self, text: str) -> CalculatorState:
        return self.dispatch(SetValue(text))
