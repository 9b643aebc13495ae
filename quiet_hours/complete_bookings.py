"""Move confirmed bookings whose window has ended to completed.

Meant to be run periodically by a scheduler (cron, Cloud Scheduler, ...):

    quiet-hours-complete-bookings
"""

import asyncio
import logging

from quiet_hours.core.database import AsyncSessionLocal, engine
from quiet_hours.services.booking_service import BookingService

logger = logging.getLogger(__name__)


async def run() -> int:
    try:
        async with AsyncSessionLocal() as session:
            completed = await BookingService(session).complete_elapsed_bookings()
    finally:
        await engine.dispose()
    logger.info(f"Marked {completed} booking(s) as completed")
    return completed


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run())


if __name__ == "__main__":
    main()
