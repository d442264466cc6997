import asyncio

from sqlalchemy import text

from meetingnotes.infrastructure.database import async_session_factory


async def clear_data():
    async with async_session_factory() as session:
        await session.execute(text("DELETE FROM summaries"))
        await session.commit()
        print("Database cleared! All summaries removed.")


asyncio.run(clear_data())
