"""Path grammar parser — tokenizes and absolutizes SVG path data.

Two stages:

1. ``parse_path_data`` scans the ``d`` text into RawCommand tuples, one per
   parameter tuple (``"L1,2 3,4"`` becomes two L commands, extra ``M`` pairs
   become implicit ``L``).
2. ``absolutize`` folds ``absolutize_step`` over the raw commands, carrying an
   explicit PathState, and produces absolute PathCommand values.

Malformed data never raises: bad tokens are skipped with a warning and a path
that cannot be parsed comes back as an empty list.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, replace
from typing import Iterator

from plangeom.engine.matrix import Point

logger = logging.getLogger(__name__)

# Parameters per command tuple
ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}

COMMAND_LETTERS = frozenset("MmLlHhVvCcSsQqTtAaZz")

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_SEPARATORS = frozenset(" \t\r\n\f,")
# Positions of large-arc and sweep flags within an arc tuple
_ARC_FLAG_SLOTS = (3, 4)


class _ScanState(enum.Enum):
    COMMAND = "scanning-for-command"
    NUMBER = "scanning-number"


@dataclass(frozen=True)
class RawCommand:
    """One command tuple as written: letter case preserved, values relative or absolute."""

    letter: str
    params: tuple[float, ...] = ()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()


@dataclass(frozen=True)
class PathCommand:
    """Absolute path command.

    ``params`` has the fixed arity of ``letter``. ``origin``/``end`` are the pen
    position before and after the command. ``reflected`` is the implied first
    control point of S/T commands.
    """

    letter: str
    params: tuple[float, ...]
    origin: Point
    end: Point
    reflected: Point | None = None

    def control_points(self) -> list[Point]:
        """Explicit coordinate pairs carried by the command (endpoint last)."""
        p = self.params
        if self.letter in ("M", "L", "T"):
            return [(p[0], p[1])]
        if self.letter in ("H", "V"):
            return [self.end]
        if self.letter == "C":
            return [(p[0], p[1]), (p[2], p[3]), (p[4], p[5])]
        if self.letter in ("S", "Q"):
            return [(p[0], p[1]), (p[2], p[3])]
        if self.letter == "A":
            return [(p[5], p[6])]
        return []

    def explicit(self) -> PathCommand:
        """Rewrite H/V as L, S as C and T as Q using the recorded state."""
        if self.letter in ("H", "V"):
            return replace(self, letter="L", params=self.end)
        if self.letter == "S" and self.reflected is not None:
            return replace(self, letter="C", params=(*self.reflected, *self.params), reflected=None)
        if self.letter == "T" and self.reflected is not None:
            return replace(self, letter="Q", params=(*self.reflected, *self.params), reflected=None)
        return self


@dataclass(frozen=True)
class PathState:
    current_x: float = 0.0
    current_y: float = 0.0
    start_x: float = 0.0
    start_y: float = 0.0
    last_control_x: float = 0.0
    last_control_y: float = 0.0
    # Letter of the previous absolute command, for S/T reflection
    previous: str = ""


# --- Tokenizer ---


def tokenize(d: str) -> Iterator[str | float]:
    """Yield command letters and numbers from path data.

    Unknown characters are skipped with a warning; unknown letters are yielded
    as-is so the grouper can discard their parameters. Inside an arc the
    large-arc and sweep flags are read as single digits, so ``a5,5 0 0110,0``
    gives flags 0 and 1 followed by the endpoint 10,0.
    """
    i = 0
    n = len(d)
    in_arc = False
    count = 0
    while i < n:
        ch = d[i]
        if ch in _SEPARATORS:
            i += 1
            continue
        if in_arc and count % ARITY["A"] in _ARC_FLAG_SLOTS and ch in "01":
            yield float(ch)
            count += 1
            i += 1
            continue
        match = _NUMBER_RE.match(d, i)
        if match:
            yield float(match.group(0))
            count += 1
            i = match.end()
            continue
        if ch.isalpha():
            yield ch
            in_arc = ch in ("A", "a")
            count = 0
        else:
            logger.warning("Unexpected character %r in path data at %d", ch, i)
        i += 1


# --- Grouping ---


def parse_path_data(d: str | None) -> list[RawCommand]:
    """Split path data into one RawCommand per parameter tuple.

    Returns an empty list when there is nothing to draw or the data does not
    start with a moveto.
    """
    if not d or not d.strip():
        return []

    groups: list[tuple[str, list[float]]] = []
    state = _ScanState.COMMAND
    letter = ""
    values: list[float] = []
    dropped_numbers = 0

    for token in tokenize(d):
        if isinstance(token, str):
            if state is _ScanState.NUMBER:
                groups.append((letter, values))
            if token in COMMAND_LETTERS:
                state, letter, values = _ScanState.NUMBER, token, []
            else:
                logger.warning("Skipping unknown path command %r", token)
                state = _ScanState.COMMAND
            continue
        if state is _ScanState.COMMAND:
            dropped_numbers += 1
            continue
        values.append(token)
    if state is _ScanState.NUMBER:
        groups.append((letter, values))

    if dropped_numbers:
        logger.warning("Dropped %d numbers with no valid command in path data", dropped_numbers)

    commands: list[RawCommand] = []
    for letter, values in groups:
        commands.extend(_expand_group(letter, values))

    if not commands:
        return []
    if commands[0].letter not in ("M", "m"):
        logger.warning("Path data does not start with a moveto: %.40r", d)
        return []
    return commands


def _expand_group(letter: str, values: list[float]) -> list[RawCommand]:
    arity = ARITY[letter.upper()]
    if arity == 0:
        if values:
            logger.warning("Ignoring %d parameters after %s", len(values), letter)
        return [RawCommand(letter)]

    count, leftover = divmod(len(values), arity)
    if leftover:
        logger.warning(
            "Dropping incomplete parameter tuple for %s (%d values, arity %d)",
            letter,
            len(values),
            arity,
        )
    if count == 0:
        logger.warning("Command %s has no parameters; skipped", letter)
        return []

    result: list[RawCommand] = []
    for k in range(count):
        tuple_letter = letter
        if k > 0 and letter in ("M", "m"):
            # Extra moveto pairs are implicit linetos
            tuple_letter = "L" if letter == "M" else "l"
        result.append(RawCommand(tuple_letter, tuple(values[k * arity : (k + 1) * arity])))
    return result


# --- Absolutization ---


def absolutize_step(state: PathState, raw: RawCommand) -> tuple[PathState, PathCommand]:
    """Resolve one raw command against the running state."""
    letter = raw.letter.upper()
    rel = raw.is_relative
    p = raw.params
    cx, cy = state.current_x, state.current_y
    ox, oy = (cx, cy) if rel else (0.0, 0.0)
    origin = (cx, cy)

    if letter == "M":
        x, y = p[0] + ox, p[1] + oy
        new = replace(
            state, current_x=x, current_y=y, start_x=x, start_y=y,
            last_control_x=x, last_control_y=y, previous="M",
        )
        return new, PathCommand("M", (x, y), origin, (x, y))

    if letter == "L":
        x, y = p[0] + ox, p[1] + oy
        new = replace(state, current_x=x, current_y=y, last_control_x=x, last_control_y=y, previous="L")
        return new, PathCommand("L", (x, y), origin, (x, y))

    if letter == "H":
        x = p[0] + ox
        new = replace(state, current_x=x, last_control_x=x, last_control_y=cy, previous="H")
        return new, PathCommand("H", (x,), origin, (x, cy))

    if letter == "V":
        y = p[0] + oy
        new = replace(state, current_y=y, last_control_x=cx, last_control_y=y, previous="V")
        return new, PathCommand("V", (y,), origin, (cx, y))

    if letter == "C":
        x1, y1 = p[0] + ox, p[1] + oy
        x2, y2 = p[2] + ox, p[3] + oy
        x, y = p[4] + ox, p[5] + oy
        new = replace(state, current_x=x, current_y=y, last_control_x=x2, last_control_y=y2, previous="C")
        return new, PathCommand("C", (x1, y1, x2, y2, x, y), origin, (x, y))

    if letter == "S":
        reflected = _reflect(state, ("C", "S"))
        x2, y2 = p[0] + ox, p[1] + oy
        x, y = p[2] + ox, p[3] + oy
        new = replace(state, current_x=x, current_y=y, last_control_x=x2, last_control_y=y2, previous="S")
        return new, PathCommand("S", (x2, y2, x, y), origin, (x, y), reflected)

    if letter == "Q":
        x1, y1 = p[0] + ox, p[1] + oy
        x, y = p[2] + ox, p[3] + oy
        new = replace(state, current_x=x, current_y=y, last_control_x=x1, last_control_y=y1, previous="Q")
        return new, PathCommand("Q", (x1, y1, x, y), origin, (x, y))

    if letter == "T":
        reflected = _reflect(state, ("Q", "T"))
        x, y = p[0] + ox, p[1] + oy
        new = replace(
            state, current_x=x, current_y=y,
            last_control_x=reflected[0], last_control_y=reflected[1], previous="T",
        )
        return new, PathCommand("T", (x, y), origin, (x, y), reflected)

    if letter == "A":
        x, y = p[5] + ox, p[6] + oy
        new = replace(state, current_x=x, current_y=y, last_control_x=x, last_control_y=y, previous="A")
        return new, PathCommand("A", (p[0], p[1], p[2], p[3], p[4], x, y), origin, (x, y))

    # Z: back to the subpath start
    sx, sy = state.start_x, state.start_y
    new = replace(state, current_x=sx, current_y=sy, last_control_x=sx, last_control_y=sy, previous="Z")
    return new, PathCommand("Z", (), origin, (sx, sy))


def _reflect(state: PathState, compatible: tuple[str, ...]) -> Point:
    if state.previous in compatible:
        return (
            2 * state.current_x - state.last_control_x,
            2 * state.current_y - state.last_control_y,
        )
    return (state.current_x, state.current_y)


def absolutize(raw_commands: list[RawCommand]) -> list[PathCommand]:
    state = PathState()
    result: list[PathCommand] = []
    for raw in raw_commands:
        state, command = absolutize_step(state, raw)
        result.append(command)
    return result


def parse_and_absolutize(d: str | None) -> list[PathCommand]:
    return absolutize(parse_path_data(d))


# --- Encoding ---


def format_number(value: float, precision: int = 3) -> str:
    """Round to ``precision`` decimals and strip trailing zeros."""
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def encode_path(commands: list[PathCommand], precision: int = 3) -> str:
    """Compact ``d`` text, e.g. ``M10,0L10,10Z``."""
    parts: list[str] = []
    for cmd in commands:
        parts.append(cmd.letter)
        if cmd.params:
            parts.append(",".join(format_number(v, precision) for v in cmd.params))
    return "".join(parts)


def subpath_count(commands: list[PathCommand]) -> int:
    return sum(1 for cmd in commands if cmd.letter == "M")
