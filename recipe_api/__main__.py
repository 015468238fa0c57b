"""Run the API with uvicorn: ``python -m recipe_api``."""

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("recipe_api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
