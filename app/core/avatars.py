"""
Deterministic avatar styling.

The same person always gets the same avatar, in the portal and in any other
client that seeds from the same string.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

STYLES = ('marble', 'pixel', 'sunset', 'ring', 'bauhaus')

PALETTE = ('#264653', '#2a9d8f', '#e9c46a', '#f4a261', '#e76f51')


@dataclass(frozen=True)
class AvatarVariant:
    seed: str
    style: str
    colors: Tuple[str, ...]

    @property
    def background(self) -> str:
        return self.colors[hash_code(self.seed) % len(self.colors)]

    @property
    def foreground(self) -> str:
        return self.colors[(hash_code(self.seed) // len(self.colors)) % len(self.colors)]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def hash_code(seed: str) -> int:
    """
    32-bit rolling string hash, ``abs(h * 31 + c)`` over UTF-16 code units.

    Wraps exactly like the browser's integer arithmetic so both sides pick the
    same variant.
    """
    value = 0
    raw = seed.encode('utf-16-le')
    for index in range(0, len(raw), 2):
        unit = raw[index] | (raw[index + 1] << 8)
        value = _to_int32((value << 5) - value + unit)
    return abs(value)


def pick_variant(name: str, email: Optional[str] = None) -> AvatarVariant:
    """Email wins over name as the seed when present."""
    seed = email or name or ''
    return AvatarVariant(seed=seed, style=STYLES[hash_code(seed) % len(STYLES)], colors=PALETTE)
