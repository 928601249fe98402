from __future__ import annotations

import msgspec

from .generator import MASK64, Pcg32, Pcg32Error

FORMAT_VERSION = 1


class GeneratorStateError(Pcg32Error):
    pass


class GeneratorState(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """The two words that fully determine a generator's future output."""

    state: int
    inc: int
    version: int = FORMAT_VERSION


_STATE_DECODER = msgspec.json.Decoder(type=GeneratorState)


def snapshot(rng: Pcg32) -> GeneratorState:
    return GeneratorState(state=int(rng.state), inc=int(rng.inc))


def restore(snap: GeneratorState) -> Pcg32:
    _validate(snap)
    return Pcg32(snap.state, snap.inc)


def _validate(snap: GeneratorState) -> None:
    if int(snap.version) != FORMAT_VERSION:
        raise GeneratorStateError(f"unsupported state version: {snap.version}")
    for name in ("state", "inc"):
        value = int(getattr(snap, name))
        if value < 0 or value > MASK64:
            raise GeneratorStateError(f"{name} out of 64-bit range: {value}")
    if not int(snap.inc) & 1:
        raise GeneratorStateError(f"inc must be odd, got 0x{int(snap.inc):016x}")


def encode_state(snap: GeneratorState) -> bytes:
    return msgspec.json.encode(snap)


def decode_state(blob: bytes | str) -> GeneratorState:
    try:
        snap = _STATE_DECODER.decode(blob)
    except msgspec.DecodeError as exc:
        raise GeneratorStateError(f"invalid generator state: {exc}") from exc
    _validate(snap)
    return snap
