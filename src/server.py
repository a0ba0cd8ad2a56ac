import asyncio
import logging
import uvicorn
from dotenv import load_dotenv

load_dotenv()

from coursehub_backend.settings import settings
from coursehub_backend.server import startup_logic

if __name__ == "__main__":

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG_MODE != "production" else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if settings.DEBUG_MODE != "production":
        asyncio.run(startup_logic())

    uvicorn.run("coursehub_backend.server:app", host="0.0.0.0", port=8000, log_level="debug", reload=True, workers=1)
