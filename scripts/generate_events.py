import asyncio
import sys
from pathlib import Path

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent.parent))

from streamstats.core.config import DatabaseSettings
from streamstats.core.exceptions import ConnectionFailure
from streamstats.core.logging import setup_logging
from streamstats.db.database import check_connection, create_engine, create_sessionmaker
from streamstats.services.data_generator_service import DataGeneratorService


async def main():
    setup_logging()

    count = 100000
    if len(sys.argv) > 1:
        if not sys.argv[1].isdigit():
            logger.error("Usage: python scripts/generate_events.py [event_count]")
            sys.exit(1)
        count = int(sys.argv[1])

    db_settings = DatabaseSettings()
    engine = create_engine(db_settings.database_url, echo=db_settings.debug_sql)

    logger.info(f"Generating {count} events...")

    try:
        await check_connection(engine)
        sessionmaker = create_sessionmaker(engine)

        async with sessionmaker() as session:
            generator = DataGeneratorService(session)
            videos = await generator.generate_videos()
            loaded = await generator.generate_events(count)

        logger.success(
            f"Event generation completed!\n"
            f"  Videos added: {videos}\n"
            f"  Events loaded: {loaded}"
        )

    except ConnectionFailure as e:
        logger.error(f"Event generation aborted: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Error generating events: {e}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
