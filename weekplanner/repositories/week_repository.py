"""
Week repository for MongoDB operations.
Updates are full replacements: every field is required and nothing from the
previous version of the document survives.
"""

from typing import List

from weekplanner.core.database import WEEKS_COLLECTION, MongoStore
from weekplanner.core.logger import logger
from weekplanner.repositories.base_repository import BaseRepository
from weekplanner.repositories.models import WeekCreate, WeekModel


class WeekRepository(BaseRepository):
    """Repository for Week documents."""

    entity_name = "Week"
    model = WeekModel

    def __init__(self, store: MongoStore):
        super().__init__(store, WEEKS_COLLECTION)

    async def list_weeks(self) -> List[WeekModel]:
        """Return all weeks, in store order."""
        documents = await self.find_all()
        weeks = [self._to_model(document) for document in documents]
        logger.info(f"✅ Listed {len(weeks)} weeks")
        return weeks

    async def get_week(self, week_id: str) -> WeekModel:
        """Return one week or raise NotFoundError."""
        return self._to_model(await self.find_by_id(week_id))

    async def create_week(self, week: WeekCreate) -> WeekModel:
        """Insert a new week and return it with its assigned id."""
        logger.info(f"📝 Creating week: year={week.year}, numweek={week.numweek}")
        document = await self.insert(week.model_dump())
        created = self._to_model(document)
        logger.info(f"✅ Week created: id={created.id}")
        return created

    async def update_week(self, week_id: str, week: WeekCreate) -> WeekModel:
        """Replace every field of an existing week."""
        logger.info(f"📝 Replacing week: id={week_id}")
        document = await self.replace_by_id(week_id, week.model_dump())
        updated = self._to_model(document)
        logger.info(f"✅ Week replaced: id={week_id}")
        return updated

    async def delete_week(self, week_id: str) -> WeekModel:
        """Delete a week and return its prior state. Tasks are not touched."""
        logger.warning(f"🗑️ Deleting week: id={week_id}")
        deleted = self._to_model(await self.delete_by_id(week_id))
        logger.info(f"✅ Week deleted: id={week_id}")
        return deleted
