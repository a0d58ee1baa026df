"""kismetprobe HTTP application entrypoint."""

import logging

from fastapi import FastAPI

from kismetprobe.api.routes import router as api_router
from kismetprobe.config import settings

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="kismetprobe",
    description="Probed SSIDs and device records from Kismet capture files",
    version="0.1.0",
)

app.include_router(api_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def main() -> None:
    import uvicorn

    logger.info("Starting kismetprobe on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
