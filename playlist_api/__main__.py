"""
Run the API with uvicorn: `python -m playlist_api`.

Host, port and log level come from settings (BACKEND_HOST, BACKEND_PORT,
LOG_LEVEL).
"""

import uvicorn

from playlist_api.config import settings


def main() -> None:
    uvicorn.run(
        "playlist_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
