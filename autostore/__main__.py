"""Serve the catalog with uvicorn using the configured server section."""

import uvicorn

from autostore.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "autostore.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
