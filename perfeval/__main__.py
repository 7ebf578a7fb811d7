"""Run the tracker with uvicorn: python -m perfeval"""

import uvicorn

from perfeval.config import settings


def main() -> None:
    uvicorn.run(
        "perfeval.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
