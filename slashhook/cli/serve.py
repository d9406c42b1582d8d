"""``slashhook-serve`` -- serve a command registry from an importable module.

Usage::

    slashhook-serve mybot.commands:registry
    slashhook-serve mybot.commands:build_registry --port 9000
    slashhook-serve mybot.commands:registry --cert-file cert.pem --key-file key.pem
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys

from rich.console import Console

from slashhook.config.settings import Settings
from slashhook.registries.commands import CommandRegistry
from slashhook.server.app import serve

logger = logging.getLogger(__name__)
console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slashhook-serve",
        description="Serve slash commands from a CommandRegistry.",
    )
    parser.add_argument(
        "target",
        help=(
            "Registry to serve, as 'package.module:attribute'.  The attribute "
            "may be a CommandRegistry or a callable returning one."
        ),
    )
    parser.add_argument("--host", default=None, help="Bind address (default: SLASHHOOK_HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, default=None, help="Port (default: SLASHHOOK_PORT or 8080).")
    parser.add_argument("--cert-file", default=None, help="TLS certificate file.")
    parser.add_argument("--key-file", default=None, help="TLS private key file.")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )
    return parser


def load_registry(target: str) -> CommandRegistry:
    """Import *target* (``module:attr``) and return the registry it names."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'package.module:attribute', got {target!r}")

    obj: object = importlib.import_module(module_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from None

    if not isinstance(obj, CommandRegistry) and callable(obj):
        obj = obj()
    if not isinstance(obj, CommandRegistry):
        raise ValueError(f"{target!r} is not a CommandRegistry (got {type(obj).__name__})")
    return obj


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.cert_file:
        settings.tls_cert_file = args.cert_file
    if args.key_file:
        settings.tls_key_file = args.key_file
    return settings


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    try:
        settings = _apply_overrides(Settings(), args)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )

    try:
        registry = load_registry(args.target)
    except (ImportError, ValueError) as exc:
        console.print(f"[red]Error:[/red] cannot load {args.target}: {exc}")
        sys.exit(1)

    if not len(registry):
        console.print(f"[yellow]Warning:[/yellow] {args.target} has no commands registered.")

    scheme = "https" if settings.tls_enabled else "http"
    console.print(
        f"[bold green]slashhook[/bold green] serving {len(registry)} command(s) "
        f"on {scheme}://{settings.host}:{settings.port}"
    )
    for path in registry.paths:
        console.print(f"  [dim]-[/dim] {path}")

    try:
        serve(registry, settings)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
