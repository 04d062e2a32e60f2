"""Run the API with uvicorn: ``python -m aeroprod``."""

import uvicorn

from aeroprod.api.main import create_app
from aeroprod.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
