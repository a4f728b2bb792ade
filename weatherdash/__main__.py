"""
Run the API with uvicorn.

Usage: python -m weatherdash
"""

import uvicorn

from weatherdash.config import Settings


def main():
    settings = Settings()
    uvicorn.run(
        "weatherdash.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
