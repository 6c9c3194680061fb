"""CLI entry point and argument parsing"""

import argparse
import asyncio
import os
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

import settings
from cli.debug_setup import setup_debug_console
from cli.login_app import MICLoginCLI
from mic import ConfigurationError, Credentials, MICConfig, MICError


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mic-login",
        description="Log in to Kinvey Mobile Identity Connect and optionally obtain a Kinvey session token"
    )
    parser.add_argument("username", nargs="?", default=None, help="Username (default: $USERNAME)")
    parser.add_argument("password", nargs="?", default=None, help="Password (default: $PASSWORD)")
    parser.add_argument(
        "--session",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exchange the MIC access token for a Kinvey session token (default: KINVEY_SESSION_EXCHANGE)"
    )
    parser.add_argument("--app-id", default=None, help="Override KINVEY_APP_ID")
    parser.add_argument("--app-secret", default=None, help="Override KINVEY_APP_SECRET")
    parser.add_argument("--redirect-uri", default=None, help="Override KINVEY_REDIRECT_URI")
    parser.add_argument("--auth-instance", default=None, help="Override KINVEY_AUTH_INSTANCE, eg vmwus1-auth")
    parser.add_argument("--data-instance", default=None, help="Override KINVEY_DATA_INSTANCE, eg vmwus1-baas")
    parser.add_argument("--timeout", type=float, default=None, help="Override MIC_REQUEST_TIMEOUT (seconds)")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    return parser


def resolve_credentials(username: Optional[str], password: Optional[str]) -> Credentials:
    """Take credentials from arguments, falling back to $USERNAME and $PASSWORD

    Raises:
        ConfigurationError: If either value is missing
    """
    username = username or os.getenv("USERNAME")
    password = password or os.getenv("PASSWORD")
    if not username:
        raise ConfigurationError("Invalid username: pass it as an argument or set USERNAME")
    if not password:
        raise ConfigurationError("Invalid password: pass it as an argument or set PASSWORD")
    return Credentials(username=username, password=password)


def main(argv: Optional[Sequence[str]] = None):
    """Entry point for the CLI"""
    global console

    args = build_parser().parse_args(argv)
    console = setup_debug_console(args.debug)

    exchange_session = settings.KINVEY_SESSION_EXCHANGE if args.session is None else args.session

    try:
        credentials = resolve_credentials(args.username, args.password)
        config = MICConfig.from_settings(
            app_id=args.app_id,
            app_secret=args.app_secret,
            redirect_uri=args.redirect_uri,
            auth_instance=args.auth_instance,
            data_instance=args.data_instance,
            timeout=args.timeout,
        )
        app = MICLoginCLI(config, console, debug=args.debug)
        asyncio.run(app.login(credentials, exchange_session=exchange_session))

    except ConfigurationError as e:
        console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        sys.exit(1)
    except MICError as e:
        # Already reported in detail by MICLoginCLI
        console.print(f"\n[red]Fatal error:[/red] {escape(str(e))}")
        if args.debug:
            console.print_exception()
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
