from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .api import Client
from .commands import COMMANDS, resolve_address, resolve_request
from .config import CONFIG_PATH, ENV_PREFIX, load_settings, resolve_timeout
from .errors import TascliError
from .models import decode
from .render import render, render_table

APPLICATION_NAME = "tascli"
APPLICATION_VERSION = "0.2.0"
APPLICATION_URL = "https://github.com/smford/tasmota-cli"

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("tascli")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.write("\n")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APPLICATION_NAME,
        description=f"Send a single command to a Tasmota device ({APPLICATION_URL})",
    )
    p.add_argument("--cmd", help=f"Command: {', '.join(COMMANDS)}")
    p.add_argument("--custom", help="Custom command string to send (escaped for you)")
    p.add_argument("--host", help="IP address or hostname of a device")
    p.add_argument("--device", help="Name of a device from the config file")
    p.add_argument("--json", action="store_true", help="Output JSON instead of text/table")
    p.add_argument("--config", default=None,
                   help=f"Configuration file (env: {ENV_PREFIX}CONFIG, default: {CONFIG_PATH})")
    p.add_argument("--timeout", type=float, default=None,
                   help=f"HTTP timeout seconds (env: {ENV_PREFIX}TIMEOUT, default: 5)")
    p.add_argument("--list", action="store_true", help="List configured devices")
    p.add_argument("--displayconfig", action="store_true", help="Display configuration")
    p.add_argument("--verbose", action="store_true", help="Be verbose")
    p.add_argument("--version", action="store_true", help="Display version")
    return p


def cmd_list(settings) -> int:
    if not settings.devices:
        _out("no devices found")
        return 0
    rows = [(addr, name) for name, addr in settings.devices.items()]
    _out(render_table(["IP", "Name"], rows))
    return 0


def cmd_displayconfig(settings) -> int:
    _out(render_table(["Config", "Setting"], settings.as_rows()))
    return 0


def cmd_send(args: argparse.Namespace) -> int:
    # usage problems are reported before any config or network access
    request = resolve_request(cmd=args.cmd, custom=args.custom)
    settings = load_settings(args.config)
    target = resolve_address(host=args.host, device=args.device, devices=settings.devices)
    timeout = resolve_timeout(args.timeout, settings)

    log.debug("Sending %s to %s (%s, timeout %ss)", request.wire, target.address, settings.method, timeout)
    with Client(timeout=timeout, method=settings.method) as client:
        body = client.fetch(target.address, request.wire)

    value = decode(request.mnemonic, body)
    fmt = "json" if args.json else "table"
    _out(render(value, fmt=fmt, label=target.label, full=request.mnemonic == "statusall"))
    return 0


def run(args: argparse.Namespace) -> int:
    if args.list or args.displayconfig:
        settings = load_settings(args.config)
        if args.displayconfig:
            return cmd_displayconfig(settings)
        return cmd_list(settings)
    return cmd_send(args)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        _out(f"{APPLICATION_NAME} {APPLICATION_VERSION}")
        return 0
    _setup_logging(args.verbose)
    try:
        return run(args)
    except TascliError as e:
        Console(stderr=True).print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        return e.exit_code
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
