"""
Run the API with uvicorn: `python -m boutique`.

Host and port come from BACKEND_HOST / BACKEND_PORT (default 0.0.0.0:5001).
"""

import uvicorn

from boutique.config import settings


def main() -> None:
    uvicorn.run(
        "boutique.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
