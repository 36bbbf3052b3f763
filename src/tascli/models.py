"""Typed views over Tasmota JSON responses.

Firmware releases add, drop and regroup fields freely, so every decoder here
reads only the keys it needs, ignores everything else and falls back to zero
values (``0`` / ``""``) for anything missing or of the wrong type. Only a body
that is not JSON at all is an error.
"""
from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Optional, Tuple, Union

from .errors import DecodeError, UnknownCommandError

TIMER_SLOTS = 16
STATE_NAMES = {0: "OFF", 1: "ON"}


def decode_json(body: bytes) -> Any:
    try:
        return json.loads(body.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response is not valid UTF-8: {e}") from e
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _get(obj: Dict[str, Any], key: str) -> Any:
    # exact key first, then any casing (POWER / Power / power)
    if key in obj:
        return obj[key]
    lowered = key.lower()
    for k, v in obj.items():
        if k.lower() == lowered:
            return v
    return None


def _int(value: Any) -> int:
    return int(value) if isinstance(value, int) and not isinstance(value, bool) else 0


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclasses.dataclass(frozen=True)
class PowerResult:
    power: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"POWER": self.power}


@dataclasses.dataclass(frozen=True)
class StatusResult:
    power: Optional[int] = 0
    tree: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def state(self) -> str:
        return STATE_NAMES.get(self.power, "UNKNOWN") if self.power is not None else "UNKNOWN"


@dataclasses.dataclass(frozen=True)
class TimerSlot:
    enable: int = 0
    mode: int = 0
    time: str = ""
    window: int = 0
    days: str = ""
    repeat: int = 0
    output: int = 0
    action: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "TimerSlot":
        d = _obj(data)
        return cls(
            enable=_int(_get(d, "Enable")),
            mode=_int(_get(d, "Mode")),
            time=_str(_get(d, "Time")),
            window=_int(_get(d, "Window")),
            days=_str(_get(d, "Days")),
            repeat=_int(_get(d, "Repeat")),
            output=_int(_get(d, "Output")),
            action=_int(_get(d, "Action")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Enable": self.enable,
            "Mode": self.mode,
            "Time": self.time,
            "Window": self.window,
            "Days": self.days,
            "Repeat": self.repeat,
            "Output": self.output,
            "Action": self.action,
        }


@dataclasses.dataclass(frozen=True)
class TimerTable:
    timers: str = ""
    slots: Tuple[TimerSlot, ...] = tuple(TimerSlot() for _ in range(TIMER_SLOTS))

    def __post_init__(self) -> None:
        if len(self.slots) != TIMER_SLOTS:
            raise ValueError(f"expected {TIMER_SLOTS} timer slots, got {len(self.slots)}")

    def named(self):
        return [(f"Timer{i}", slot) for i, slot in enumerate(self.slots, start=1)]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"Timers": self.timers}
        for name, slot in self.named():
            out[name] = slot.to_dict()
        return out


@dataclasses.dataclass(frozen=True)
class RawJSON:
    value: Any = None


Decoded = Union[PowerResult, StatusResult, TimerTable, RawJSON]


def decode_power(body: bytes) -> PowerResult:
    return PowerResult(power=_str(_get(_obj(decode_json(body)), "POWER")))


def decode_status(body: bytes) -> StatusResult:
    tree = _obj(decode_json(body))
    power = _get(_obj(_get(tree, "Status")), "Power")
    if power is None:
        value: Optional[int] = 0
    elif isinstance(power, int) and not isinstance(power, bool):
        value = power
    else:
        value = None
    return StatusResult(power=value, tree=tree)


def _find_timer(root: Dict[str, Any], name: str) -> Any:
    found = _get(root, name)
    if found is not None:
        return found
    # newer firmware splits the table into Timers1..Timers4 groups
    for key, group in root.items():
        if key.lower().startswith("timers") and isinstance(group, dict):
            found = _get(group, name)
            if found is not None:
                return found
    return None


def decode_timers(body: bytes) -> TimerTable:
    root = _obj(decode_json(body))
    slots = tuple(TimerSlot.from_json(_find_timer(root, f"Timer{i}")) for i in range(1, TIMER_SLOTS + 1))
    return TimerTable(timers=_str(_get(root, "Timers")), slots=slots)


def decode_raw(body: bytes) -> RawJSON:
    return RawJSON(value=decode_json(body))


DECODERS = {
    "on": decode_power,
    "off": decode_power,
    "status": decode_status,
    "statusall": decode_status,
    "timers": decode_timers,
}


def decode(mnemonic: Optional[str], body: bytes) -> Decoded:
    """Decode ``body`` for a normalized mnemonic; ``None`` means a custom command."""
    if mnemonic is None:
        return decode_raw(body)
    try:
        decoder = DECODERS[mnemonic]
    except KeyError:
        raise UnknownCommandError(mnemonic) from None
    return decoder(body)
