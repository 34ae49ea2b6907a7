"""Clanboard CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from clanboard import __version__
from clanboard.config import Settings, get_settings
from clanboard.services import SeasonService
from clanboard.storage import connect_store, describe_store, sanitize_mongodb_url

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

SECRET_FIELDS = {"logfire_token", "jwt_secret"}


def masked_settings(settings: Settings) -> dict:
    """Settings as plain data with secrets replaced by a set/unset marker."""
    data = settings.model_dump(mode="json")

    def mask(section: dict) -> dict:
        masked = {}
        for key, value in section.items():
            if isinstance(value, dict):
                masked[key] = mask(value)
            elif key in SECRET_FIELDS:
                masked[key] = "***" if value else ""
            else:
                masked[key] = value
        return masked

    masked = mask(data)
    masked["store"]["mongodb_url"] = sanitize_mongodb_url(settings.store.mongodb_url)
    return masked


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server."""
    import uvicorn

    try:
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        uvicorn.run(
            "clanboard.api:create_app",
            factory=True,
            host=args.host or settings.server.host,
            port=args.port or settings.server.port,
            reload=args.reload,
            log_level=settings.log_level.lower(),
        )
        return 0

    except KeyboardInterrupt:
        print("\n\nReceived interrupt signal. Shutting down...\n")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        print(f"\nFailed to start: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== Clanboard Configuration ===\n")
        print(yaml.safe_dump(masked_settings(settings), sort_keys=False))
        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return 1


async def _collect_status(settings: Settings) -> dict:
    store = connect_store(settings.store)
    try:
        if not await store.ping():
            return {"reachable": False}

        seasons = SeasonService(store, settings.store)
        names, current = await seasons.names_and_current()
        return {"reachable": True, "seasons": names, "current": current}
    finally:
        await store.close()


def cmd_status(args: argparse.Namespace) -> int:
    """Display document store reachability and seasons."""
    try:
        settings = get_settings()
        info = describe_store(settings.store)

        print("\n=== Clanboard Status ===\n")
        print(f"Store: {info['backend']} ({info['url'] or 'in-process'}, database {info['database']})")

        status = asyncio.run(_collect_status(settings))
        if not status["reachable"]:
            print("  ✗ Unreachable\n")
            return 1

        print("  ✓ Reachable\n")
        print(f"Seasons: {len(status['seasons'])}")
        for name in status["seasons"]:
            marker = " (current)" if name == status["current"] else ""
            print(f"  • {name}{marker}")
        if not status["seasons"]:
            print("  (None)")
        print()

        return 0

    except Exception as e:
        logger.error(f"Failed to read status: {e}")
        print(f"\n❌ Failed to read status: {e}\n")
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Clanboard: reporting backend for the clan dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Clanboard {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_serve = subparsers.add_parser(
        "serve",
        help="Run the API server",
    )
    parser_serve.add_argument("--host", help="Bind address (default from config)")
    parser_serve.add_argument("--port", type=int, help="Port (default from config)")
    parser_serve.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes",
    )
    parser_serve.set_defaults(func=cmd_serve)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_status = subparsers.add_parser(
        "status",
        help="Check the document store and list seasons",
    )
    parser_status.set_defaults(func=cmd_status)

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
