from __future__ import annotations

import os

import uvicorn

from widgetforge_core.app import create_app
from widgetforge_core.config import load_toolkit_config
from widgetforge_core.logs import configure_logging


def main() -> None:
    config = load_toolkit_config()
    configure_logging(config.logging)

    host = os.environ.get("WIDGETFORGE_BIND") or config.server.bind_host

    env_port = os.environ.get("WIDGETFORGE_PORT")
    port = int(env_port) if env_port else config.server.port

    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
