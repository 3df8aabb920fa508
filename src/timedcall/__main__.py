"""Demo: report elapsed time while waiting on a slow operation.

Usage:
    python -m timedcall [--duration 5] [--interval 1] [--log-level DEBUG]
"""

from __future__ import annotations

import argparse
import asyncio
import time

from timedcall import configure_logging, run_with_timed_callback


async def _finish_after(seconds: float) -> str:
    await asyncio.sleep(seconds)
    return "Finished"


async def demo(duration: float, interval: float) -> str:
    started = time.monotonic()

    def report() -> None:
        print(f"Time since main task started: {time.monotonic() - started:.3f} seconds")

    # Void primary: a plain sleep already in flight
    main_task = asyncio.ensure_future(asyncio.sleep(duration))
    await run_with_timed_callback(main_task, interval, report, name="demo-void")
    print(f"Main task finished in {time.monotonic() - started:.3f} seconds")

    # Value primary
    result_task = asyncio.create_task(_finish_after(duration))
    result = await run_with_timed_callback(result_task, interval, report, name="demo-value")
    print(f'Result task finished in {time.monotonic() - started:.3f} seconds and returned "{result}"')
    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="timedcall", description="Timed callback runner demo")
    parser.add_argument("--duration", type=float, default=5.0, help="seconds each demo operation runs")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between ticks")
    parser.add_argument("--log-level", default=None, help="override TIMEDCALL_LOG_LEVEL")
    parser.add_argument("--log-format", choices=("text", "json"), default=None)
    args = parser.parse_args(argv)

    configure_logging(format=args.log_format, level=args.log_level)
    asyncio.run(demo(args.duration, args.interval))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
