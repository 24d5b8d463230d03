"""Poll a fresh simulation for a few seconds and print the tracked car's speed."""

import asyncio

from trafficsync import AsyncTrafficSimClient, PollScheduler, SyncSession


async def main(rate_hz: int = 10, seconds: float = 5.0) -> None:
    async with AsyncTrafficSimClient() as sim:
        session = SyncSession(sim)
        if not await session.provision():
            print("Could not create a simulation. Is the service running on :8000?")
            return

        scheduler = PollScheduler(session, rate_hz=rate_hz)
        scheduler.start()
        await asyncio.sleep(seconds / 2)

        # Double the rate halfway through; the schedule keeps running
        scheduler.set_rate(rate_hz * 2)
        await asyncio.sleep(seconds / 2)
        await scheduler.aclose()

    print(f"=== {len(session.samples)} samples from {session.location} ===")
    for sample in session.samples:
        print(f"  #{sample.index:4d}  {sample.value:9.1f} px/s")


if __name__ == "__main__":
    asyncio.run(main())
