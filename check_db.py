import sys
import os
import asyncio
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

sys.path.append(os.getcwd())

from app.db.session import async_session_maker, engine

TABLES = ["users", "fasting_sessions", "food_logs", "weight_goals", "weight_logs"]


async def check_data():
    async with async_session_maker() as session:
        print(f"Checking tables: {TABLES}")
        for table in TABLES:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except SQLAlchemyError as e:
                print(f"Error querying {table}: {e}")
                await session.rollback()

        # Invariant check: nobody should have more than one active fast
        result = await session.execute(text(
            "SELECT user_id, count(*) FROM fasting_sessions "
            "WHERE status = 'active' GROUP BY user_id HAVING count(*) > 1"
        ))
        offenders = result.all()
        if offenders:
            print(f"Users with more than one active fast: {offenders}")
        else:
            print("Active fast invariant holds.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
