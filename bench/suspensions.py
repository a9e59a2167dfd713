"""Suspension-point benchmark for the read coroutines.

Counts how many I/O requests ReadExact/ReadToEnd emit against an
in-memory 1 MB source for several buffer capacities, and how long the
blocking runtime takes to serve them. Meant for manual runs.
"""

import asyncio
import io
import time

from streamcoro.coroutines import ReadExact, ReadToEnd
from streamcoro.core.model import Io, Ok
from streamcoro.io import handle, handle_async
from streamcoro.io.stream_async import AsyncioStream

PAYLOAD = bytes(range(256)) * 4096  # 1 MB
CAPACITIES = [512, 4 * 1024, 8 * 1024, 64 * 1024]


def count_suspensions(coroutine, stream) -> tuple[int, bytes]:
    arg = None
    suspensions = 0
    while True:
        result = coroutine.resume(arg)
        if isinstance(result, Io):
            suspensions += 1
            arg = handle(stream, result.io)
            continue
        assert isinstance(result, Ok), result
        return suspensions, result.value


def bench_sync():
    """Blocking runtime over BytesIO."""
    for capacity in CAPACITIES:
        for name, coroutine in (
            ("read_to_end", ReadToEnd(capacity)),
            ("read_exact", ReadExact(len(PAYLOAD) - 1, capacity)),
        ):
            start = time.perf_counter()
            suspensions, data = count_suspensions(coroutine, io.BytesIO(PAYLOAD))
            elapsed = time.perf_counter() - start
            assert PAYLOAD.startswith(data)
            print(f"{name:12} capacity={capacity:6}  suspensions={suspensions:5}  {elapsed * 1000:7.2f} ms")


async def bench_async():
    """Asyncio runtime over a fed StreamReader."""
    for capacity in CAPACITIES:
        reader = asyncio.StreamReader()
        reader.feed_data(PAYLOAD)
        reader.feed_eof()
        stream = AsyncioStream(reader)

        coroutine = ReadToEnd(capacity)
        arg = None
        suspensions = 0
        start = time.perf_counter()
        while True:
            result = coroutine.resume(arg)
            if not isinstance(result, Io):
                break
            suspensions += 1
            arg = await handle_async(stream, result.io)
        elapsed = time.perf_counter() - start
        assert result == Ok(PAYLOAD)
        print(f"{'async':12} capacity={capacity:6}  suspensions={suspensions:5}  {elapsed * 1000:7.2f} ms")


if __name__ == "__main__":
    print("streamcoro suspension benchmark")
    print("=" * 40)

    bench_sync()
    print()

    asyncio.run(bench_async())

    print("\nBenchmark complete!")
