"""Straight and arc segment instructions."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from racetrack.utils.exceptions import InstructionError

STRAIGHT_TAGS = ("s", "straight")
ARC_TAGS = ("c", "arc")


def _require_finite(name: str, value: float) -> None:
    """Reject non-finite instruction parameters.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        racetrack.utils.exceptions.InstructionError: If ``value`` is NaN or
            infinite.
    """
    if not math.isfinite(value):
        msg = f"{name} must be finite, got: {value!r}"
        raise InstructionError(msg)


@dataclass(frozen=True)
class Straight:
    """Straight track piece along the current heading.

    Args:
        length: Segment length [m].
    """

    length: float

    def __post_init__(self) -> None:
        """Validate the straight length.

        Raises:
            racetrack.utils.exceptions.InstructionError: If the length is not a
                positive finite number.
        """
        _require_finite("Straight length", self.length)
        if self.length <= 0.0:
            msg = f"Straight length must be positive, got: {self.length!r}"
            raise InstructionError(msg)


@dataclass(frozen=True)
class Arc:
    """Circular track piece turning around a fixed curvature center.

    Args:
        radius: Centerline radius of the turn [m].
        angle: Signed turn angle [deg]. Positive turns left
            (counter-clockwise), negative turns right.
    """

    radius: float
    angle: float

    def __post_init__(self) -> None:
        """Validate the arc radius and angle.

        Raises:
            racetrack.utils.exceptions.InstructionError: If the radius is not
                positive or the angle is zero or non-finite.
        """
        _require_finite("Arc radius", self.radius)
        _require_finite("Arc angle", self.angle)
        if self.radius <= 0.0:
            msg = f"Arc radius must be positive, got: {self.radius!r}"
            raise InstructionError(msg)
        if self.angle == 0.0:
            msg = "Arc angle must be non-zero"
            raise InstructionError(msg)

    @property
    def direction(self) -> int:
        """Turn direction sign.

        Returns:
            ``+1`` for a left turn and ``-1`` for a right turn.
        """
        return 1 if self.angle > 0.0 else -1

    @property
    def angle_rad(self) -> float:
        """Signed turn angle in radians.

        Returns:
            Turn angle [rad].
        """
        return math.radians(self.angle)


SegmentInstruction: TypeAlias = Straight | Arc


def parse_instruction(raw: Any) -> SegmentInstruction:
    """Convert a compact tagged instruction into a segment object.

    Accepted forms are ``("s", length)`` and ``("c", (radius, angle))``; the
    long tags ``"straight"`` and ``"arc"`` work too. Instruction objects are
    returned unchanged.

    Args:
        raw: Tagged tuple or ready-made :class:`Straight`/:class:`Arc`.

    Returns:
        Parsed segment instruction.

    Raises:
        racetrack.utils.exceptions.InstructionError: If the tag is unknown or
            the parameters are missing or invalid.
    """
    if isinstance(raw, (Straight, Arc)):
        return raw
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (tuple, list)) or len(raw) != 2:
        msg = f"Instruction must be a (tag, parameters) pair, got: {raw!r}"
        raise InstructionError(msg)

    tag, params = raw
    kind = str(tag).strip().lower()
    try:
        if kind in STRAIGHT_TAGS:
            return Straight(length=float(params))
        if kind in ARC_TAGS:
            radius, angle = params
            return Arc(radius=float(radius), angle=float(angle))
    except (TypeError, ValueError) as exc:
        msg = f"Invalid parameters for {tag!r} instruction: {params!r}"
        raise InstructionError(msg) from exc

    msg = f"Unknown segment tag: {tag!r}"
    raise InstructionError(msg)


def parse_instructions(raw_sequence: Iterable[Any]) -> tuple[SegmentInstruction, ...]:
    """Parse an ordered sequence of tagged instructions.

    Args:
        raw_sequence: Iterable of tagged tuples or instruction objects.

    Returns:
        Tuple of parsed segment instructions in input order.

    Raises:
        racetrack.utils.exceptions.InstructionError: If any entry is
            malformed. The message names the offending index.
    """
    parsed: list[SegmentInstruction] = []
    for idx, raw in enumerate(raw_sequence):
        try:
            parsed.append(parse_instruction(raw))
        except InstructionError as exc:
            msg = f"Instruction {idx}: {exc}"
            raise InstructionError(msg) from exc
    return tuple(parsed)
