"""
vetcare_auth.api.__main__

Entrypoint for running the FastAPI application via `python -m vetcare_auth.api`.

Responsibilities:
- Load settings (fails fast in prod without a real JWT secret).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from vetcare_auth.api.app import create_app
from vetcare_auth.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
