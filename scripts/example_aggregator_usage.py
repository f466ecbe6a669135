#!/usr/bin/env python3
"""
Example of sliding-window aggregation with concurrent producers and a
periodic reporter.

Demonstrates:
1. Building an aggregator from configs/ (or defaults)
2. Feeding it from several producer threads
3. Periodic snapshot reporting (console + snapshots.log)
4. Background eviction with WindowSweeper
5. Graceful shutdown

Usage:
    python scripts/example_aggregator_usage.py [--config-dir configs] [--duration 10]
"""

import argparse
import random
import threading
import time

from windowstats.monitoring import SlidingWindowAggregator, WindowSweeper
from windowstats.utils.config import ConfigManager
from windowstats.utils.logger import MetricsLogger


def produce(aggregator: SlidingWindowAggregator, stop: threading.Event, seed: int) -> None:
    """Emit latency-like values every 10-50ms until stopped."""
    rng = random.Random(seed)
    while not stop.is_set():
        aggregator.add_point(rng.lognormvariate(3.0, 0.5))
        stop.wait(rng.uniform(0.01, 0.05))


def print_report(aggregator: SlidingWindowAggregator) -> None:
    result = aggregator.snapshot()
    MetricsLogger.log_snapshot("demo_latency_ms", result)

    print(f"\n📊 Stats Report @ {time.strftime('%H:%M:%S')}")
    print("-" * 60)
    if result.is_empty:
        print("  No data in window yet...")
        return

    print(f"  Count:   {result.count}")
    print(f"  Mean:    {result.mean:8.2f}")
    print(f"  StdDev:  {result.std_dev:8.2f}")
    print(f"  Min/Max: {result.min:8.2f} / {result.max:.2f}")
    for rank, value in result.percentiles.items():
        print(f"  P{rank:g}:{'':<4}{value:8.2f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Sliding-window aggregator demo")
    parser.add_argument("--config-dir", default="configs")
    parser.add_argument("--duration", type=float, default=10.0, help="Seconds to run")
    parser.add_argument("--producers", type=int, default=4)
    parser.add_argument("--report-interval", type=float, default=2.0)
    args = parser.parse_args()

    config = ConfigManager(args.config_dir)
    MetricsLogger(vars(config.logging_config))

    aggregator = SlidingWindowAggregator.from_config(config.aggregator_config)
    sweeper = WindowSweeper(
        aggregator, interval_seconds=config.aggregator_config.sweep_interval_seconds or 1.0
    )

    stop = threading.Event()
    producers = [
        threading.Thread(target=produce, args=(aggregator, stop, i), daemon=True)
        for i in range(args.producers)
    ]

    print("=" * 60)
    print(f"Running {args.producers} producers for {args.duration:.0f}s")
    print("=" * 60)

    sweeper.start()
    for thread in producers:
        thread.start()

    deadline = time.monotonic() + args.duration
    try:
        while time.monotonic() < deadline:
            time.sleep(args.report_interval)
            print_report(aggregator)
    except KeyboardInterrupt:
        print("\nInterrupted")
    finally:
        stop.set()
        for thread in producers:
            thread.join(timeout=1.0)
        sweeper.stop()

    print_report(aggregator)


if __name__ == "__main__":
    main()
