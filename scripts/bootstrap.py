import asyncio
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent))

from streamstats.core.config import AppUserSettings, DatabaseSettings
from streamstats.core.exceptions import ConnectionFailure, ConstraintViolation
from streamstats.core.logging import setup_logging
from streamstats.db.database import check_connection, create_engine, create_sessionmaker
from streamstats.services.bootstrap_service import SAMPLE_DATA_PATH, BootstrapService


async def main():
    setup_logging()

    json_file_path = Path(sys.argv[1]) if len(sys.argv) > 1 else SAMPLE_DATA_PATH
    if not json_file_path.exists():
        logger.error(f"File not found: {json_file_path}")
        sys.exit(1)

    try:
        db_settings = DatabaseSettings()
        user_settings = AppUserSettings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    engine = create_engine(db_settings.database_url, echo=db_settings.debug_sql)

    logger.info("Starting bootstrap...")

    try:
        await check_connection(engine)
        sessionmaker = create_sessionmaker(engine)

        async with sessionmaker() as session:
            service = BootstrapService(session)

            tables = await service.create_schema()
            logger.success(f"Collections ready: {', '.join(tables)}")

            try:
                result = await service.load_samples(json_file_path)
                logger.success(
                    f"Sample data inserted!\n"
                    f"  Videos: {result['videos']}\n"
                    f"  Video stats: {result['video_stats']}"
                )
            except ConstraintViolation as e:
                logger.warning(f"Skipping sample data: {e}")

            try:
                if await service.provision_app_user(user_settings):
                    logger.success(f"Application user {user_settings.app_db_user} created")
            except ConstraintViolation as e:
                logger.warning(f"Skipping application user: {e}")

        logger.success("Bootstrap complete!")

    except ConnectionFailure as e:
        logger.error(f"Bootstrap aborted: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Error during bootstrap: {e}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
