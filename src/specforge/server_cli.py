"""CLI entry point for the SpecForge API server."""

import argparse
import os

from specforge.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="specforge-server",
        description="SpecForge API server: requirements and code to validated AppSpec",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: colored console logs instead of JSON",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["SPECFORGE_JSON_LOGS"] = "0"
        settings.json_logs = False

    import uvicorn

    uvicorn.run("specforge.main:app", host=args.host, port=args.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
