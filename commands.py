"""Translate simplified dashboard request bodies into LIFX cloud API payloads.

Every payload only carries the fields the caller actually supplied, so the
cloud API leaves the remaining device attributes untouched.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from colors import hex_to_cloud_color

DEFAULT_TRANSITION = 0.5
DEFAULT_PALETTE = ["red", "orange", "yellow", "green", "blue", "purple"]


class InvalidRequest(ValueError):
    pass


def _number(body, name, default=None, minimum=None):
    value = body.get(name)
    if value is None:
        return default
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidRequest(f"'{name}' must be a number")
    if minimum is not None and value < minimum:
        raise InvalidRequest(f"'{name}' must be at least {minimum}")
    return value


def _flag(body, name, default):
    value = body.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidRequest(f"'{name}' must be true or false")
    return value


def _color(body, name="color"):
    value = body.get(name)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidRequest(f"'{name}' must be a hex color string")
    return hex_to_cloud_color(value)


def _choice(body, name, choices, default=None):
    value = body.get(name)
    if value is None:
        return default
    if value not in choices:
        raise InvalidRequest(f"'{name}' must be one of: {', '.join(choices)}")
    return value


def clamp_brightness(value):
    return max(0, min(1, value))


def _compact(payload):
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class StateUpdate:
    power: Optional[str] = None
    color: Optional[str] = None
    brightness: Optional[float] = None
    duration: float = DEFAULT_TRANSITION

    @classmethod
    def from_body(cls, body):
        brightness = _number(body, "brightness")
        return cls(
            power=_choice(body, "power", ("on", "off")),
            color=_color(body),
            brightness=None if brightness is None else clamp_brightness(brightness),
            duration=_number(body, "duration", DEFAULT_TRANSITION, minimum=0),
        )

    def to_payload(self):
        return _compact({
            "power": self.power,
            "color": self.color,
            "brightness": self.brightness,
            "duration": self.duration,
        })


@dataclass
class Breathe:
    name = "breathe"

    color: Optional[str] = None
    period: float = 1
    cycles: float = 3
    power_on: bool = True
    persist: bool = False
    peak: float = 0.5

    @classmethod
    def from_body(cls, body):
        return cls(
            color=_color(body),
            period=_number(body, "period", 1, minimum=0),
            cycles=_number(body, "cycles", 3, minimum=0),
            power_on=_flag(body, "power_on", True),
            persist=_flag(body, "persist", False),
            peak=_number(body, "peak", 0.5, minimum=0),
        )

    def to_payload(self):
        return _compact({
            "color": self.color,
            "period": self.period,
            "cycles": self.cycles,
            "power_on": self.power_on,
            "persist": self.persist,
            "peak": self.peak,
        })


@dataclass
class Morph:
    name = "morph"

    period: float = 5
    duration: Optional[float] = None
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    power_on: bool = True
    fast: bool = False

    @classmethod
    def from_body(cls, body):
        palette = body.get("palette")
        if palette is None:
            palette = list(DEFAULT_PALETTE)
        elif not isinstance(palette, list) or not all(isinstance(c, str) for c in palette):
            raise InvalidRequest("'palette' must be a list of color strings")

        return cls(
            period=_number(body, "period", 5, minimum=0),
            duration=_number(body, "duration", minimum=0),
            palette=palette,
            power_on=_flag(body, "power_on", True),
            fast=_flag(body, "fast", False),
        )

    def to_payload(self):
        return _compact({
            "period": self.period,
            "duration": self.duration,
            "palette": self.palette,
            "power_on": self.power_on,
            "fast": self.fast,
        })


@dataclass
class Move:
    name = "move"

    direction: str = "forward"
    period: float = 1
    cycles: Optional[float] = None
    power_on: bool = True
    fast: bool = False

    @classmethod
    def from_body(cls, body):
        return cls(
            direction=_choice(body, "direction", ("forward", "backward"), "forward"),
            period=_number(body, "period", 1, minimum=0),
            cycles=_number(body, "cycles", minimum=0),
            power_on=_flag(body, "power_on", True),
            fast=_flag(body, "fast", False),
        )

    def to_payload(self):
        return _compact({
            "direction": self.direction,
            "period": self.period,
            "cycles": self.cycles,
            "power_on": self.power_on,
            "fast": self.fast,
        })


@dataclass
class StopEffects:
    name = "off"

    power_off: bool = False

    @classmethod
    def from_body(cls, body):
        power_off = body.get("power_off")
        # Non-boolean values fall back to the default
        return cls(power_off=power_off if isinstance(power_off, bool) else False)

    def to_payload(self):
        return {"power_off": self.power_off}


EFFECTS = {effect.name: effect for effect in (Breathe, Morph, Move, StopEffects)}


@dataclass
class SceneActivation:
    duration: float = 1
    fast: bool = False

    @classmethod
    def from_body(cls, body):
        return cls(
            duration=_number(body, "duration", 1, minimum=0),
            fast=_flag(body, "fast", False),
        )

    def to_payload(self):
        return {"duration": self.duration, "fast": self.fast}
