from __future__ import annotations

"""Non-overlapping generators for parallel workers."""

from .generator import Pcg32, Pcg32Error


def substream(init_state: int, init_seq: int, worker_index: int, block_size: int) -> Pcg32:
    """Seeded generator positioned at block `worker_index` of the shared stream.

    Workers that each draw at most `block_size` raw values never overlap.
    """
    worker_index = int(worker_index)
    block_size = int(block_size)
    if worker_index < 0:
        raise Pcg32Error(f"worker_index must be non-negative, got {worker_index}")
    if block_size < 1:
        raise Pcg32Error(f"block_size must be positive, got {block_size}")
    rng = Pcg32.from_seed(init_state, init_seq)
    if worker_index:
        rng.advance(worker_index * block_size)
    return rng


def substreams(init_state: int, init_seq: int, count: int, block_size: int) -> list[Pcg32]:
    count = int(count)
    if count < 0:
        raise Pcg32Error(f"count must be non-negative, got {count}")
    return [substream(init_state, init_seq, index, block_size) for index in range(count)]


def stream_family(init_state: int, count: int, first_seq: int = 0) -> list[Pcg32]:
    # Distinct sequence selectors give distinct odd increments.
    count = int(count)
    if count < 0:
        raise Pcg32Error(f"count must be non-negative, got {count}")
    first_seq = int(first_seq)
    return [Pcg32.from_seed(init_state, first_seq + offset) for offset in range(count)]
