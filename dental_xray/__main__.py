from __future__ import annotations

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

from .config import Settings

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the Dental X-ray Analyzer API server",
        epilog="HF_TOKEN must be set in the environment (or a .env file) for analyses to reach the model.",
    )
    parser.add_argument("--host", type=str, default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    logger.info("Server configuration: %s:%s", args.host, args.port)
    logger.info("Classification endpoint: %s", settings.model_url)
    uvicorn.run("dental_xray.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
