from __future__ import annotations

import hashlib

RNG_WORLDGEN_STREAM_NAME = "rng_worldgen"
RNG_IDS_STREAM_NAME = "rng_ids"


def seed_from_phrase(phrase: str) -> int:
    """Derive the 64-bit master seed for a run from a human-chosen phrase."""
    digest = hashlib.sha256(phrase.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=False)


def derive_stream_seed(master_seed: int, stream_name: str) -> int:
    """Derive a deterministic child RNG seed from (master_seed, stream_name)."""
    digest = hashlib.sha256(f"{master_seed}:{stream_name}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=False)
