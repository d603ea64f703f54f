"""Run the mock server with uvicorn: ``python -m okta_mock``."""

import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "okta_mock.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
