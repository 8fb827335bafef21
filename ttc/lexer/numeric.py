"""
Numeric literal classifier.

A deterministic state machine deciding whether a run of digits, signs,
decimal points and exponent markers is an integer, a real, or neither.
The lexer scans a maximal run of ``0-9 . E`` and asks this module what it
found.
"""

from enum import Enum, IntEnum


class NumberKind(Enum):
    """Result of classifying a numeric lexeme."""
    INVALID = "invalid"
    FLOAT = "float"
    INTEGER = "integer"


class _State(IntEnum):
    START = 0       # nothing read yet
    SIGN = 1        # + or - at the start
    INTEGER = 2     # integer digits
    POINT = 3       # the decimal point
    FRACTION = 4    # fraction digits
    EXP_MARK = 5    # the E before an exponent
    EXP_SIGN = 6    # + or - before the exponent digits
    EXP_INTEGER = 7 # exponent digits
    ERROR = 8


class _CharClass(IntEnum):
    SIGN = 0
    DIGIT = 1
    POINT = 2
    EXPONENT = 3


_S = _State

# Rows indexed by state, columns by character class
_TRANSITIONS = (
    #  +/-          0-9             .           E
    (_S.SIGN,     _S.INTEGER,     _S.ERROR,   _S.ERROR),     # START
    (_S.ERROR,    _S.INTEGER,     _S.ERROR,   _S.ERROR),     # SIGN
    (_S.ERROR,    _S.INTEGER,     _S.POINT,   _S.EXP_MARK),  # INTEGER
    (_S.ERROR,    _S.FRACTION,    _S.ERROR,   _S.ERROR),     # POINT
    (_S.ERROR,    _S.FRACTION,    _S.ERROR,   _S.EXP_MARK),  # FRACTION
    (_S.EXP_SIGN, _S.EXP_INTEGER, _S.ERROR,   _S.ERROR),     # EXP_MARK
    (_S.ERROR,    _S.EXP_INTEGER, _S.ERROR,   _S.ERROR),     # EXP_SIGN
    (_S.ERROR,    _S.EXP_INTEGER, _S.ERROR,   _S.ERROR),     # EXP_INTEGER
    (_S.ERROR,    _S.ERROR,       _S.ERROR,   _S.ERROR),     # ERROR
)

_ACCEPTING = {
    _S.INTEGER: NumberKind.INTEGER,
    _S.FRACTION: NumberKind.FLOAT,
    _S.EXP_INTEGER: NumberKind.FLOAT,
}


def _char_class(char: str):
    if char in "+-":
        return _CharClass.SIGN
    if "0" <= char <= "9":
        return _CharClass.DIGIT
    if char == ".":
        return _CharClass.POINT
    if char == "E":
        return _CharClass.EXPONENT
    return None


def classify_number(text: str) -> NumberKind:
    """
    Classify a numeric lexeme.

    Args:
        text: Candidate lexeme, e.g. ``"12.5"`` or ``"1E-5"``

    Returns:
        NumberKind.INTEGER, NumberKind.FLOAT or NumberKind.INVALID
    """
    state = _S.START
    for char in text:
        char_class = _char_class(char)
        if char_class is None:
            return NumberKind.INVALID
        state = _TRANSITIONS[state][char_class]
    return _ACCEPTING.get(state, NumberKind.INVALID)
