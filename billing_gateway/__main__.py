"""Run the gateway with uvicorn: ``python -m billing_gateway``."""

import uvicorn

from .core.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run("billing_gateway.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
