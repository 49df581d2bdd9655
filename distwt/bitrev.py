"""Bit reversal of 32-bit words and of their low bits."""

_BITREV8 = [int(f"{i:08b}"[::-1], 2) for i in range(256)]


def bitrev32(v: int) -> int:
    """Reverse the order of the 32 bits of ``v``."""
    v &= 0xFFFFFFFF
    data = v.to_bytes(4, "little")
    return int.from_bytes(bytes(_BITREV8[b] for b in data), "big")


def bitrev(x: int, b: int) -> int:
    """Reverse the lowest ``b`` bits of ``x`` (0 <= b <= 32)."""
    if not 0 <= b <= 32:
        raise ValueError(f"bit count out of range: {b}")
    if b == 0:
        return 0
    return bitrev32(x) >> (32 - b)