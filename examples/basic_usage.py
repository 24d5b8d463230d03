"""Basic usage examples for the traffic simulation client."""

from trafficsync import TrafficSimClient, TrackGeometry, estimate_speed


def main() -> None:
    geometry = TrackGeometry()
    with TrafficSimClient() as sim:
        print("=== New simulation ===")
        created = sim.create_simulation()
        print(f"  Location: {created.location}")
        for car in created.cars:
            print(f"  car {car.id} at x={car.position}")

        tracked = created.find(geometry.tracked_id)
        if tracked is None or tracked.position is None:
            print(f"  Car {geometry.tracked_id} is not on the track.")
            return

        print("\n=== One tick later ===")
        snapshot = sim.snapshot(created.location)
        moved = snapshot.find(geometry.tracked_id)
        if moved is None or moved.position is None:
            print(f"  Car {geometry.tracked_id} disappeared.")
            return

        # One tick per second
        speed = estimate_speed(
            tracked.position, moved.position,
            extent=geometry.extent, scale=geometry.scale, rate=1,
        )
        print(f"  car {geometry.tracked_id}: {tracked.position:.2f} -> {moved.position:.2f}")
        print(f"  speed at 1 Hz: {speed:.1f} px/s")


if __name__ == "__main__":
    main()
