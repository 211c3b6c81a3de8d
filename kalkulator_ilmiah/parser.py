"""Terminal input adapter: turns typed key tokens into engine commands.

A line such as ``3 + 4 × 2 =`` or ``90 sin`` is split into tokens and each
token becomes one or more commands. Numerals expand to Digit/DecimalPoint
presses, so ``12.5`` is the same as pressing ``1``, ``2``, ``.``, ``5``.
"""

from __future__ import annotations

import re

from .types import (
    AllClear,
    Clear,
    ClearHistory,
    Command,
    Constant,
    DecimalPoint,
    Digit,
    Equals,
    MemoryCommand,
    Operator,
    PressConstant,
    PressFunction,
    PressMemory,
    PressOperator,
    RecallHistory,
    ScientificFunction,
    ToggleAngleMode,
    ValidationError,
)

# Order matters: multi-character key labels before numerals and words.
TOKEN_RE = re.compile(
    r"recall:-?\d+"
    r"|10\^x|1/x|e\^x|x\^2|x²|x!"
    r"|[Mm][+\-]"
    r"|\d+(?:\.\d*)?|\.\d+"
    r"|[A-Za-zπ√]+"
    r"|\*\*"
    r"|[+\-*/×÷^%=.!]"
)
NUMERAL_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")
# Tails of the 1/x and 10^x labels; a numeral run cannot be followed by one.
LABEL_TAIL_RE = re.compile(r"/x|\^x")

KEYWORD_COMMANDS = {
    "=": Equals,
    "c": Clear,
    "clear": Clear,
    "ac": AllClear,
    "allclear": AllClear,
    "ch": ClearHistory,
    "clearhistory": ClearHistory,
    "mode": ToggleAngleMode,
    "drg": ToggleAngleMode,
}


def tokenize(text: str) -> list[str]:
    """Split a line of key input into tokens.

    Raises:
        ValidationError: text contains a character no token starts with,
            or a numeral runs into a key label such as ``21/x``
    """
    tokens = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        match = TOKEN_RE.match(text, pos)
        if match is None:
            raise ValidationError(
                f"Unexpected character {text[pos]!r} at position {pos}", "UNKNOWN_TOKEN"
            )
        if NUMERAL_RE.match(match.group(0)) and LABEL_TAIL_RE.match(text, match.end()):
            raise ValidationError(
                f"Key label glued to the number {match.group(0)!r} at position {pos}; "
                "separate them with a space",
                "UNKNOWN_TOKEN",
            )
        tokens.append(match.group(0))
        pos = match.end()
    return tokens


def _numeral_commands(token: str) -> list[Command]:
    return [DecimalPoint() if ch == "." else Digit(ch) for ch in token]


def parse_token(token: str) -> list[Command]:
    """Translate a single token into the commands it stands for."""
    if NUMERAL_RE.match(token):
        return _numeral_commands(token)
    if token == ".":
        return [DecimalPoint()]
    if token.startswith("recall:"):
        return [RecallHistory(int(token.split(":", 1)[1]))]

    keyword = KEYWORD_COMMANDS.get(token.lower())
    if keyword is not None:
        return [keyword()]

    for vocabulary, command in (
        (Operator, PressOperator),
        (ScientificFunction, PressFunction),
        (MemoryCommand, PressMemory),
        (Constant, PressConstant),
    ):
        try:
            return [command(vocabulary.parse(token))]
        except ValidationError:
            continue
    raise ValidationError(f"Unknown token: {token!r}", "UNKNOWN_TOKEN")


def parse_tokens(text: str) -> list[Command]:
    """Translate a line of key input into engine commands.

    Args:
        text: Tokens such as ``"3 + 4 =", "90 sin", "pi MS AC MR"``

    Returns:
        Commands in input order

    Raises:
        ValidationError: an unknown token or character was found
    """
    commands: list[Command] = []
    for token in tokenize(text):
        commands.extend(parse_token(token))
    return commands
