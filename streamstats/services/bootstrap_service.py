import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Union

from dateutil import parser as date_parser
from loguru import logger
from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.core.config import AppUserSettings
from streamstats.core.exceptions import ConstraintViolation
from streamstats.db.database import Base
from streamstats.models import Video, VideoStats
from streamstats.schemas.video import VideoRecord
from streamstats.schemas.video_stats import VideoStatsRecord

SAMPLE_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_data.json"

DATE_FIELDS = ("upload_date", "last_updated")


# Statements embed the quoted secret, so colons must not be read as bind params.
def literal_sql(statement: str) -> TextClause:
    return text(statement.replace(":", r"\:"))


def build_app_user_statements(role: str, password: str, database: str, dialect: Dialect) -> List[str]:
    preparer = dialect.identifier_preparer
    quoted_role = preparer.quote(role)
    quoted_db = preparer.quote(database)
    quoted_password = "'" + password.replace("'", "''") + "'"
    return [
        f"CREATE ROLE {quoted_role} WITH LOGIN PASSWORD {quoted_password}",
        f"GRANT CONNECT ON DATABASE {quoted_db} TO {quoted_role}",
        f"GRANT USAGE ON SCHEMA public TO {quoted_role}",
        f"GRANT SELECT, INSERT, UPDATE, DELETE ON ALL TABLES IN SCHEMA public TO {quoted_role}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT SELECT, INSERT, UPDATE, DELETE ON TABLES TO {quoted_role}",
    ]


class BootstrapService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_schema(self) -> List[str]:
        conn = await self.db.connection()
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        await self.db.commit()

        tables = sorted(Base.metadata.tables)
        indexes = sum(len(table.indexes) for table in Base.metadata.tables.values())
        logger.info(f"Schema ready: {len(tables)} tables, {indexes} indexes")
        return tables

    async def load_samples(self, json_file_path: Union[str, Path] = SAMPLE_DATA_PATH) -> Dict[str, int]:
        file_path = Path(json_file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"JSON file not found: {json_file_path}")

        logger.info(f"Loading sample data from {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        videos = [
            Video(**VideoRecord.model_validate(self._parse_dates(row)).model_dump())
            for row in data.get('videos', [])
        ]
        stats = [
            VideoStats(**VideoStatsRecord.model_validate(self._parse_dates(row)).model_dump())
            for row in data.get('video_stats', [])
        ]

        if not videos and not stats:
            logger.warning("No sample rows found in JSON file")
            return {'videos': 0, 'video_stats': 0}

        try:
            self.db.add_all(videos)
            self.db.add_all(stats)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Sample data already present: {e.orig}")
            raise ConstraintViolation("Sample rows collide with existing unique keys") from e

        logger.info(f"Sample data inserted: {len(videos)} videos, {len(stats)} video stats")
        return {'videos': len(videos), 'video_stats': len(stats)}

    async def provision_app_user(self, settings: AppUserSettings) -> bool:
        conn = await self.db.connection()
        dialect = conn.dialect

        if dialect.name != "postgresql":
            logger.warning(f"Credential provisioning is not supported on {dialect.name}, skipping")
            return False

        role = settings.app_db_user
        existing = await self.db.execute(
            text("SELECT 1 FROM pg_roles WHERE rolname = :role"), {"role": role}
        )
        if existing.scalar_one_or_none() is not None:
            raise ConstraintViolation(f"Role {role} already exists")

        database = (await self.db.execute(text("SELECT current_database()"))).scalar_one()
        statements = build_app_user_statements(
            role, settings.app_db_password.get_secret_value(), database, dialect
        )

        try:
            for statement in statements:
                await self.db.execute(literal_sql(statement))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Application user {role} granted read-write on {database}")
        return True

    def _parse_dates(self, row: dict) -> dict:
        parsed = dict(row)
        for field in DATE_FIELDS:
            value = parsed.get(field)
            if isinstance(value, str):
                parsed[field] = self._parse_datetime(value)
        return parsed

    def _parse_datetime(self, date_string: str) -> datetime:
        if isinstance(date_string, datetime):
            return date_string
        return date_parser.parse(date_string)
