import asyncio
import sys
from pathlib import Path

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent.parent))

from streamstats.core.config import DatabaseSettings
from streamstats.core.exceptions import ConnectionFailure, PipelineFailure
from streamstats.core.logging import setup_logging
from streamstats.db.database import check_connection, create_engine, create_sessionmaker
from streamstats.services.report_service import render_report
from streamstats.services.stats_service import StatsService


async def main():
    setup_logging()

    top_n = 5
    if len(sys.argv) > 1:
        if not sys.argv[1].isdigit() or int(sys.argv[1]) < 1:
            logger.error("Usage: python scripts/rebuild_stats.py [top_n]")
            sys.exit(1)
        top_n = int(sys.argv[1])

    db_settings = DatabaseSettings()
    engine = create_engine(db_settings.database_url, echo=db_settings.debug_sql)

    logger.info("Starting video stats rebuild...")

    try:
        await check_connection(engine)
        sessionmaker = create_sessionmaker(engine)

        async with sessionmaker() as session:
            report = await StatsService(session).run(top_n=top_n)

        for line in render_report(report):
            print(line)

        logger.success(f"Video stats rebuilt: {report.created} entries")

    except (ConnectionFailure, PipelineFailure) as e:
        logger.error(f"Stats rebuild aborted: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Error rebuilding stats: {e}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
