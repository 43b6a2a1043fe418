"""Entry point for serving the Event Registration API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  Other settings such as
``DATABASE_URL``, ``ADMIN_PASSWORD`` and ``SECRET_KEY`` are read by
``event_registration_api.app.core.config``.

Usage:
    python run.py
"""
import logging
import os

from uvicorn import Config, Server


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(
        app="event_registration_api.app.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
    logging.getLogger(__name__).info("Serving on %s:%s", host, port)
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
