# Administrative reset: delete every stored waste scan. Not reachable over HTTP.
# Usage example:
# python -m scripts.clear_scans --yes
import argparse
import asyncio
import logging
import sys

from app.database import AsyncSessionLocal
from app.services.event_store import SqlEventStore

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def clear() -> int:
    async with AsyncSessionLocal() as session:
        return await SqlEventStore(session).clear()


def main():
    parser = argparse.ArgumentParser(description='Delete all waste scans')
    parser.add_argument('--yes', action='store_true', help='Confirm the bulk delete')

    args = parser.parse_args()
    if not args.yes:
        logger.error("Refusing to clear without --yes")
        sys.exit(1)

    deleted = asyncio.run(clear())
    logger.info("Deleted %d waste scan records", deleted)


if __name__ == '__main__':
    main()
