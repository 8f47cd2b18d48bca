import argparse
import logging
import sys

from icecream import ic

from core.config import get_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Acronym Lookup - definitions from Acromine")

    parser.add_argument(
        "term",
        nargs="?",
        help="Search term as 'sf=<acronym>' (prompts for terms when omitted)",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help="Seconds to wait for an answer (default: from settings)",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Log requests and show debug output",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    updates: dict[str, object] = {}
    if args.debug:
        updates["debug"] = True
    if args.timeout is not None:
        updates["lookup_timeout"] = args.timeout
    if updates:
        settings = settings.model_copy(update=updates)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ic.configureOutput(prefix="🔎 DEBUG | ")
    if not settings.debug:
        ic.disable()
    ic(settings.lookup_endpoint, settings.lookup_timeout)

    from client.app import ClientApp

    app = ClientApp(settings, term=args.term)
    return app.execute()


if __name__ == "__main__":
    sys.exit(main())
