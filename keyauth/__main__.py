"""keyauth entry point: start aiohttp server."""

import logging
import sys

from keyauth.config import load_config
from keyauth.server import create_app


def main() -> None:
    from aiohttp import web

    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config["logging"]["level"].upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    server = config["server"]
    app = create_app(config)
    web.run_app(
        app,
        port=server["port"],
        access_log=web.access_logger if server["access_log"] else None,
        shutdown_timeout=server["shutdown_timeout"],
    )


if __name__ == "__main__":
    main()
