"""Create (or show) a local user so the API can be exercised without the auth service.

Usage: python scripts/seed_user.py you@example.com "Your Name"
Prints the user id to send as the X-User-Id header.
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from app.db.session import async_session_maker, engine
from app.models.user import User


async def main(email: str, name: str):
    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user:
            print(f"User already exists: {user.id}")
        else:
            user = User(email=email, name=name)
            session.add(user)
            await session.commit()
            print(f"Created user: {user.id}")
    await engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else ""))
