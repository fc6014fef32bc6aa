"""
Run the API with uvicorn:

  python -m app.serve

Listens on HOST:PORT from settings (default 0.0.0.0:3000).
"""

import uvicorn

from app.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
