"""Run the API server: `python -m postboard` (host/port from settings)."""

import uvicorn

from postboard.config import settings


def main() -> None:
    uvicorn.run(
        "postboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
