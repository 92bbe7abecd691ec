from pathlib import Path
import logging
import os
import sys

from dotenv import load_dotenv
from sqlalchemy.exc import OperationalError

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from playguard.bootstrap import create_services
from playguard.presentation.cli import parse_args, run_command


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Commands: roll, status --player ID, played --player ID, welcome --player ID.")
    print("- Settings: PLAYGUARD_TIMEZONE, PLAYGUARD_SLEEP_* and PLAYGUARD_ABSTINENCE_HOURS.")
    print("- Startup issues: verify PLAYGUARD_DATABASE_URL or unset it to use in-memory mode.")


def _is_database_connectivity_error(exc: Exception) -> bool:
    if isinstance(exc, OperationalError):
        return True
    text = str(exc).lower()
    markers = (
        "sqlalchemy.exc.operationalerror",
        "unable to open database file",
        "could not connect to server",
        "can't connect to",
        "connection refused",
    )
    return any(marker in text for marker in markers)


def _configure_logging() -> None:
    level_name = os.getenv("PLAYGUARD_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    load_dotenv()
    _configure_logging()
    args = parse_args(argv)
    try:
        services = create_services()
        return run_command(services, args)
    except KeyboardInterrupt:
        print("\nSession ended.")
        return 130
    except Exception as exc:
        if os.getenv("PLAYGUARD_DATABASE_URL") and _is_database_connectivity_error(exc):
            print("Session database unavailable; retrying in-memory mode.")
            os.environ.pop("PLAYGUARD_DATABASE_URL", None)
            try:
                services = create_services()
                return run_command(services, args)
            except KeyboardInterrupt:
                print("\nSession ended.")
                return 130
            except Exception as fallback_exc:
                exc = fallback_exc
        print("An unexpected error occurred. The command closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1


if __name__ == "__main__":
    sys.exit(main())
