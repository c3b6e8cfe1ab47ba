"""Situational hole overrides and their resolution.

A hole may carry one ``VariantOverride`` per ``Variant`` (a winter green,
a personal aiming target off the tee, a temporary checkpoint...). Callers
pick which variants are active through a ``Selector``; lookups scan the
selector in order and fall back to the hole's own attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel

from golfmap.geo import Area, Coordinate

if TYPE_CHECKING:  # pragma: no cover
    from .schema import Hole


class Variant(str, Enum):
    SEASONAL = "seasonal"
    PERSONAL = "personal"
    TEMPORARY = "temporary"


class Channel(str, Enum):
    TEE = "tee"
    GREEN = "green"
    CHECKPOINT = "checkpoint"


PrecedenceOp = Callable[[Variant, Variant], bool]

# Scan order used when a caller does not supply its own precedence.
DEFAULT_PRECEDENCE: Tuple[Variant, ...] = (
    Variant.SEASONAL,
    Variant.PERSONAL,
    Variant.TEMPORARY,
)

# Each channel is stored under the attribute of the same name, on both
# holes and overrides.
_CHANNEL_ATTRS: Dict[Channel, str] = {
    Channel.TEE: "tee",
    Channel.GREEN: "green",
    Channel.CHECKPOINT: "checkpoint",
}


def channel_value(source: Any, channel: Channel) -> Any:
    return getattr(source, _CHANNEL_ATTRS[channel])


def default_precedence(a: Variant, b: Variant) -> bool:
    """Return True when ``a`` must be consulted before ``b``."""

    return DEFAULT_PRECEDENCE.index(a) < DEFAULT_PRECEDENCE.index(b)


class VariantOverride(BaseModel):
    tee: Optional[Area] = None
    green: Optional[Area] = None
    checkpoint: Optional[Coordinate] = None

    @property
    def is_empty(self) -> bool:
        return self.tee is None and self.green is None and self.checkpoint is None

    def channel_is_set(self, channel: Channel) -> bool:
        return channel_value(self, channel) is not None


@dataclass(frozen=True)
class Selector:
    """Ordered subset of variants consulted during resolution."""

    ordered_variants: Tuple[Variant, ...] = ()

    @classmethod
    def build(
        cls,
        variants: Iterable[Variant] = (),
        precedence: PrecedenceOp = default_precedence,
    ) -> "Selector":
        requested = set(variants)
        # Start from declaration order so that ties stay deterministic.
        candidates = [variant for variant in Variant if variant in requested]

        def _compare(a: Variant, b: Variant) -> int:
            if precedence(a, b):
                return -1
            if precedence(b, a):
                return 1
            return 0

        return cls(tuple(sorted(candidates, key=cmp_to_key(_compare))))

    @classmethod
    def all(cls, precedence: PrecedenceOp = default_precedence) -> "Selector":
        return cls.build(Variant, precedence)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self.ordered_variants)

    def __contains__(self, variant: object) -> bool:
        return variant in self.ordered_variants

    def __len__(self) -> int:
        return len(self.ordered_variants)


def resolved_variant(
    hole: "Hole", channel: Channel, selector: Optional[Selector] = None
) -> Optional[Variant]:
    """Return the variant supplying ``channel`` for ``hole``, if any."""

    for variant in selector or ():
        override = hole.variants.get(variant)
        if override is not None and override.channel_is_set(channel):
            return variant
    return None


def resolve(hole: "Hole", channel: Channel, selector: Optional[Selector] = None) -> Any:
    """Resolve the effective value of ``channel`` for ``hole``.

    The first variant of ``selector`` whose override sets the channel wins;
    otherwise the hole's base value is returned (which may be None).
    """

    variant = resolved_variant(hole, channel, selector)
    if variant is not None:
        return channel_value(hole.variants[variant], channel)
    return channel_value(hole, channel)


__all__ = [
    "Channel",
    "DEFAULT_PRECEDENCE",
    "PrecedenceOp",
    "Selector",
    "Variant",
    "VariantOverride",
    "channel_value",
    "default_precedence",
    "resolve",
    "resolved_variant",
]
