# reset_db.py
import asyncio
import logging

from database import engine, init_models, settings

logger = logging.getLogger(__name__)


async def reset():
    logger.info(f"Dropping and recreating all tables on {engine.url.render_as_string(hide_password=True)}")
    await init_models(drop=True)
    await engine.dispose()
    logger.info("Database reset complete.")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(reset())
