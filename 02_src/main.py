"""Main entry point: run the SIM against the configured collector."""

import asyncio
import os
from pathlib import Path

from dotenv import load_dotenv

from sim import Sim
from yelix_cloud import ClientSettings, MachineIdentity, YelixCloud, get_machine_identity
from yelix_cloud.logging_config import setup_logging


async def run(settings: ClientSettings, identity: MachineIdentity) -> None:
    """Build the client and run one scenario."""
    async with YelixCloud.from_settings(settings, identity=identity) as client:
        sim = Sim(
            client,
            environment=os.getenv("YELIX_ENVIRONMENT", "development"),
            request_count=int(os.getenv("SIM_REQUEST_COUNT", "10")),
        )
        await sim.run()


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    settings = ClientSettings.from_env()
    # Hostname/IP lookups block; resolve before the event loop starts.
    identity = get_machine_identity()

    asyncio.run(run(settings, identity))


if __name__ == "__main__":
    main()
