"""Run the site with uvicorn: ``python -m ninjacoders``."""

import uvicorn

from ninjacoders.core.config import settings


def main() -> None:
    uvicorn.run(
        "ninjacoders.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
