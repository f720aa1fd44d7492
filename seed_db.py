import asyncio
import logging

from app.config import settings
from app.database import async_session, create_tables
from app.services.database_service import DatabaseService
from app.services.demo_data import DEMO_FOUNDER_ID, seed_demo_data
from app.services.store import SqlDataStore


async def async_main():
    await create_tables()
    db = DatabaseService(SqlDataStore(async_session))
    counts = await seed_demo_data(db, settings.FOUNDER_USER_ID or DEMO_FOUNDER_ID)
    print(f"Seeded {counts['members']} members and {counts['tasks']} tasks into {settings.DATABASE_URL}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(async_main())
