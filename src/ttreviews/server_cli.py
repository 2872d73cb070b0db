"""CLI entry point for the TT Reviews moderation API server.

Options are exported as ``TTR_*`` environment variables before the app is
imported, so they take precedence over ``.env`` values.
"""

import argparse
import os

LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ttreviews-server",
        description="Moderation API for TT Reviews community submissions",
    )
    parser.add_argument("--host", help="Bind host (default: TTR_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Bind port (default: TTR_PORT or 8080)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use the ttreviews_local.db SQLite file and console logs",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Override TTR_LOG_LEVEL")
    parser.add_argument(
        "--required-approvals",
        type=int,
        metavar="N",
        help="Distinct moderator approvals needed to publish (default: 2)",
    )
    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    if args.local:
        os.environ["TTR_LOCAL_MODE"] = "1"
    if args.log_level:
        os.environ["TTR_LOG_LEVEL"] = args.log_level
    if args.required_approvals is not None:
        if args.required_approvals < 1:
            raise SystemExit("--required-approvals must be at least 1")
        os.environ["TTR_REQUIRED_APPROVALS"] = str(args.required_approvals)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    apply_overrides(args)

    import uvicorn

    from ttreviews.config import Settings

    settings = Settings()
    uvicorn.run(
        "ttreviews.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
