"""Run the onboarding API with uvicorn: ``python -m onboard``."""

import logging

import uvicorn

from onboard.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("onboard.api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
