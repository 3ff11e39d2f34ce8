from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from identipy.app import identify_user, import_user, track_user, verify_self
from identipy.config import configure_logging
from identipy.domain.errors import IdentifyError, NeedInputError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify user identities")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    identify = subparsers.add_parser("identify", help="Identify a user")
    identify.add_argument("name", type=str, help="Name of the user to identify")
    identify.add_argument(
        "--as",
        dest="me",
        type=str,
        help="Identify as this user, comparing against their tracking statement",
    )
    identify.add_argument(
        "--lax",
        action="store_true",
        help="Report failing proofs as warnings instead of errors",
    )

    track = subparsers.add_parser("track", help="Identify a user and record a tracking statement")
    track.add_argument("name", type=str, help="Name of the user to track")
    track.add_argument(
        "--as",
        dest="me",
        type=str,
        required=True,
        help="User recording the tracking statement",
    )

    verify = subparsers.add_parser(
        "verify-self",
        help="Check the locally configured fingerprint against the identity record",
    )
    verify.add_argument(
        "--user",
        type=str,
        help="Current user (defaults to IDENTIPY_USER)",
    )
    verify.add_argument(
        "--background",
        action="store_true",
        help="Never prompt; fail if confirmation would be needed",
    )

    importer = subparsers.add_parser("import-user", help="Import a JSON identity record")
    importer.add_argument("path", type=Path, help="Path to the identity record")

    return parser.parse_args(list(argv))


def _run_identify(args: argparse.Namespace) -> int:
    result = identify_user(args.name, me_name=args.me)
    error, warnings = result.classify_error(strict=not args.lax)
    warnings.warn(log)
    if error is not None:
        log.error("Identification of %s failed: %s", args.name, error)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    exit_code = 0
    try:
        if parsed_args.command == "identify":
            exit_code = _run_identify(parsed_args)
        elif parsed_args.command == "track":
            statement = track_user(parsed_args.name, me_name=parsed_args.me)
            log.info("Recorded tracking statement %s", statement.id)
        elif parsed_args.command == "verify-self":
            verify_self(name=parsed_args.user, background=parsed_args.background)
            log.info("Key fingerprint verified")
        elif parsed_args.command == "import-user":
            user = import_user(parsed_args.path)
            log.info("Imported user %s (%s)", user.name, user.id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except NeedInputError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(3)
    except IdentifyError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
