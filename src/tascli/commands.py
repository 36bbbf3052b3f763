from __future__ import annotations

import dataclasses
import logging
from typing import Mapping, Optional
from urllib.parse import quote_plus

from .errors import UnknownCommandError, UsageError

log = logging.getLogger(__name__)

# mnemonic -> already-escaped device command
COMMANDS: dict[str, str] = {
    "on": "Power%20On",
    "off": "Power%20Off",
    "status": "Status0",
    "statusall": "Status0",
    "timers": "Timers",
}


@dataclasses.dataclass(frozen=True)
class CommandRequest:
    wire: str
    mnemonic: Optional[str] = None
    custom: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.mnemonic is None


@dataclasses.dataclass(frozen=True)
class DeviceTarget:
    address: str
    label: str


def normalize(mnemonic: str) -> str:
    return mnemonic.strip().lower()


def resolve(mnemonic: str) -> str:
    """Map a mnemonic such as ``on`` to the device command ``Power%20On``.

    Matching ignores case and surrounding whitespace. Raises
    :class:`UnknownCommandError` for anything outside :data:`COMMANDS`.
    """
    key = normalize(mnemonic)
    try:
        return COMMANDS[key]
    except KeyError:
        raise UnknownCommandError(mnemonic) from None


def encode_custom(raw: str) -> str:
    return quote_plus(raw)


def resolve_request(cmd: Optional[str] = None, custom: Optional[str] = None) -> CommandRequest:
    if cmd is not None and custom is not None:
        raise UsageError("--custom or --cmd cannot be used at the same time")
    if cmd is None and custom is None:
        raise UsageError("either --custom or --cmd must be set")
    if custom is not None:
        wire = encode_custom(custom)
        log.debug("Custom command: %s", custom)
        log.debug("Custom command escaped: %s", wire)
        return CommandRequest(wire=wire, custom=custom)
    wire = resolve(cmd)
    return CommandRequest(wire=wire, mnemonic=normalize(cmd))


def resolve_address(host: Optional[str] = None, device: Optional[str] = None,
                    devices: Optional[Mapping[str, str]] = None) -> DeviceTarget:
    if host is not None and device is not None:
        raise UsageError("--device and --host cannot be used at the same time")
    if host is None and device is None:
        raise UsageError("either --device or --host must be set")
    if host is not None:
        return DeviceTarget(address=host, label=host)
    table = devices or {}
    if device not in table:
        raise UsageError(f"Device: {device} not found")
    log.debug("Device: %s found", device)
    return DeviceTarget(address=table[device], label=device)
