from __future__ import annotations

from typing import Optional


class TascliError(Exception):
    """Base class for expected failures; carries the process exit code."""

    exit_code = 1


class UsageError(TascliError):
    exit_code = 2


class UnknownCommandError(UsageError):
    def __init__(self, mnemonic: str) -> None:
        super().__init__(f'Command "{mnemonic}" is invalid')
        self.mnemonic = mnemonic


class ConfigError(UsageError):
    pass


class TransportError(TascliError):
    """The device did not answer, or answered with a non-200 status."""

    exit_code = 3

    def __init__(self, message: str = "Could not reach device", status_code: Optional[int] = None,
                 body: bytes = b"") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(TascliError):
    """The device answered but the payload could not be parsed."""

    exit_code = 4
