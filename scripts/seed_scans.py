# Insert a month of demo scans for one user so the dashboard has something to show.
# Usage example:
# python -m scripts.seed_scans --user-id demo-user --seed 42
import argparse
import asyncio
import logging

from app.database import AsyncSessionLocal, init_models
from app.services.event_store import SqlEventStore
from app.services.mock_store import generate_mock_events

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def seed(user_id: str, seed_value: int, force: bool) -> int:
    await init_models()
    async with AsyncSessionLocal() as session:
        store = SqlEventStore(session)

        existing = await store.query(user_id=user_id)
        if existing and not force:
            logger.info("User %s already has %d scans. Aborting seed.", user_id, len(existing))
            return 0

        events = generate_mock_events(user_id, seed=seed_value)
        for event in events:
            await store.append(event.model_dump(), user_id=user_id)
        return len(events)


def main():
    parser = argparse.ArgumentParser(description='Seed demo waste scans')
    parser.add_argument('--user-id', required=True, help='Owner of the generated scans')
    parser.add_argument('--seed', type=int, default=42, help='Random seed for reproducible data')
    parser.add_argument('--force', action='store_true', help='Seed even if the user already has scans')

    args = parser.parse_args()

    inserted = asyncio.run(seed(args.user_id, args.seed, args.force))
    logger.info("Seeded %d waste scan records", inserted)


if __name__ == '__main__':
    main()
