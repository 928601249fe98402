from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .generator import DEFAULT_INC, DEFAULT_STATE, MULT, IndexedSequence, Pcg32, Pcg32Error, advance_lcg_64
from .state import GeneratorState, GeneratorStateError, decode_state, encode_state, restore, snapshot
from .streams import stream_family, substream, substreams

try:
    __version__ = version("pcg32")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_INC",
    "DEFAULT_STATE",
    "GeneratorState",
    "GeneratorStateError",
    "IndexedSequence",
    "MULT",
    "Pcg32",
    "Pcg32Error",
    "advance_lcg_64",
    "decode_state",
    "encode_state",
    "restore",
    "snapshot",
    "stream_family",
    "substream",
    "substreams",
]
