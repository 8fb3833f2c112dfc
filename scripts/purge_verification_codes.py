import asyncio

from marketplace.features.auth.workers.tasks import purge_expired_codes
from marketplace.platform.config import settings


async def purge():
    removed = await purge_expired_codes(settings.DATABASE_URL)
    print(f"✅ Removed {removed} expired verification codes")

asyncio.run(purge())
