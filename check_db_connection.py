"""Quick check that the configured MongoDB deployment is reachable."""

import asyncio
import sys

from dotenv import load_dotenv

from mflix_api.boundary.db.connection import ConnectionManager
from mflix_api.configs import get_settings
from mflix_api.core.exceptions import DatabaseConnectionError
from mflix_api.observability.log_utils import redact_uri

load_dotenv()


async def check_connection() -> bool:
    """Connect, ping and list collections."""
    settings = get_settings()
    print(f"MongoDB URI: {redact_uri(settings.database.uri)}")
    print(f"Database: {settings.database.db}")

    manager = ConnectionManager(settings.database)
    try:
        print("\nConnecting...")
        await manager.acquire()
        print("✓ Ping successful")

        collections = await manager.describe()
        print(f"✓ Collections: {', '.join(collections) or '(none)'}")

        print("\n✓ All connection checks passed!")
        return True
    except DatabaseConnectionError as e:
        print(f"\n✗ Connection failed: {e}")
        return False
    finally:
        await manager.close()


if __name__ == "__main__":
    success = asyncio.run(check_connection())
    sys.exit(0 if success else 1)
