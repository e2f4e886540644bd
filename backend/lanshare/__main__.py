"""Run the server: `python -m lanshare [--host H] [--port P] [--storage DIR]`."""
import argparse
import logging

import uvicorn

from lanshare.config import Settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Share files on the local network.")
    parser.add_argument("--host", help="interface to bind (default: API_HOST)")
    parser.add_argument("--port", type=int, help="port to listen on (default: API_PORT)")
    parser.add_argument("--storage", help="upload directory (default: FILE_STORAGE_PATH)")
    args = parser.parse_args(argv)

    overrides = {
        "API_HOST": args.host,
        "API_PORT": args.port,
        "FILE_STORAGE_PATH": args.storage,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    from lanshare.main import create_app
    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
