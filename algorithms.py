"""Name -> engine class lookup, in the spirit of `hashlib.new`."""

from __future__ import annotations

from typing import Dict, Type

from engine import StreamingHash
from sha2 import SHA2_224, SHA2_256, SHA2_384, SHA2_512, SHA2_512_224, SHA2_512_256
from sm3 import SM3


ALGORITHMS: Dict[str, Type[StreamingHash]] = {
    cls.name: cls
    for cls in (SHA2_224, SHA2_256, SHA2_384, SHA2_512, SHA2_512_224, SHA2_512_256, SM3)
}


def new(name: str, data=None) -> StreamingHash:
    """Return a fresh engine for algorithm `name`, optionally fed with `data`."""
    try:
        cls = ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {name!r}, expected one of {', '.join(sorted(ALGORITHMS))}"
        ) from None
    return cls(data)
