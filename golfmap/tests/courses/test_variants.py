from __future__ import annotations

import pytest

from golfmap.courses import (
    DEFAULT_PRECEDENCE,
    Channel,
    Hole,
    Par,
    Selector,
    Variant,
    VariantOverride,
    default_precedence,
    resolve,
)
from golfmap.courses.variants import resolved_variant
from golfmap.geo import Area, Coordinate


def _area(lat: float) -> Area:
    return Area(start=Coordinate(lat=lat, lon=0.0), end=Coordinate(lat=lat, lon=0.001))


BASE_TEE = _area(1.0)
SEASONAL_TEE = _area(2.0)
PERSONAL_TEE = _area(3.0)
BASE_GREEN = _area(10.0)
TEMPORARY_GREEN = _area(11.0)


@pytest.fixture()
def hole() -> Hole:
    return Hole(
        par=Par.PAR4,
        tee=BASE_TEE,
        green=BASE_GREEN,
        variants={
            Variant.SEASONAL: VariantOverride(tee=SEASONAL_TEE),
            Variant.PERSONAL: VariantOverride(tee=PERSONAL_TEE),
            Variant.TEMPORARY: VariantOverride(green=TEMPORARY_GREEN),
        },
    )


def test_default_precedence_is_explicit_table() -> None:
    assert DEFAULT_PRECEDENCE == (Variant.SEASONAL, Variant.PERSONAL, Variant.TEMPORARY)
    assert default_precedence(Variant.SEASONAL, Variant.TEMPORARY)
    assert not default_precedence(Variant.TEMPORARY, Variant.PERSONAL)


def test_selector_orders_input_by_precedence() -> None:
    selector = Selector.build({Variant.TEMPORARY, Variant.PERSONAL, Variant.SEASONAL})

    assert selector.ordered_variants == DEFAULT_PRECEDENCE
    assert Selector.all() == selector


def test_selector_with_custom_precedence() -> None:
    def temporary_first(a: Variant, b: Variant) -> bool:
        order = [Variant.TEMPORARY, Variant.PERSONAL, Variant.SEASONAL]
        return order.index(a) < order.index(b)

    selector = Selector.build(Variant, temporary_first)

    assert list(selector) == [Variant.TEMPORARY, Variant.PERSONAL, Variant.SEASONAL]


def test_selector_collapses_duplicates() -> None:
    selector = Selector.build([Variant.PERSONAL, Variant.PERSONAL])

    assert selector.ordered_variants == (Variant.PERSONAL,)
    assert Variant.PERSONAL in selector
    assert Variant.SEASONAL not in selector
    assert len(selector) == 1


def test_empty_selector_returns_base_values(hole: Hole) -> None:
    assert hole.tee_for() == BASE_TEE
    assert hole.green_for(Selector()) == BASE_GREEN
    assert hole.checkpoint_for() is None


def test_earliest_variant_wins(hole: Hole) -> None:
    selector = Selector.all()

    assert hole.tee_for(selector) == SEASONAL_TEE
    assert hole.resolved_variant(Channel.TEE, selector) is Variant.SEASONAL


def test_channels_fall_through_independently(hole: Hole) -> None:
    selector = Selector.all()

    # Neither seasonal nor personal sets a green, so temporary supplies it.
    assert hole.green_for(selector) == TEMPORARY_GREEN
    assert resolved_variant(hole, Channel.GREEN, selector) is Variant.TEMPORARY
    assert resolve(hole, Channel.CHECKPOINT, selector) is None
    assert resolved_variant(hole, Channel.CHECKPOINT, selector) is None


def test_partial_selector_ignores_other_variants(hole: Hole) -> None:
    personal_only = Selector.build({Variant.PERSONAL})

    assert hole.tee_for(personal_only) == PERSONAL_TEE
    assert hole.green_for(personal_only) == BASE_GREEN


def test_seasonal_override_found_whatever_the_input_order() -> None:
    hole = Hole(
        par=Par.PAR3,
        tee=BASE_TEE,
        variants={Variant.SEASONAL: VariantOverride(tee=SEASONAL_TEE)},
    )
    selector = Selector.build([Variant.TEMPORARY, Variant.PERSONAL, Variant.SEASONAL])

    assert hole.resolve(Channel.TEE, selector) == SEASONAL_TEE


def test_override_emptiness_and_channels() -> None:
    override = VariantOverride()
    assert override.is_empty

    override.checkpoint = Coordinate(lat=1.0, lon=1.0)
    assert not override.is_empty
    assert override.channel_is_set(Channel.CHECKPOINT)
    assert not override.channel_is_set(Channel.TEE)


def test_variant_override_is_created_once_and_edited_in_place() -> None:
    hole = Hole(par=Par.PAR4, tee=BASE_TEE)
    checkpoint = Coordinate(lat=5.0, lon=5.0)

    assert hole.variant_override(Variant.PERSONAL, create=False) is None
    hole.variant_override(Variant.PERSONAL).checkpoint = checkpoint
    hole.create_variant_if_absent(Variant.PERSONAL)

    assert list(hole.variants) == [Variant.PERSONAL]
    assert hole.checkpoint_for(Selector.build({Variant.PERSONAL})) == checkpoint
    assert hole.checkpoint_for() is None

    removed = hole.remove_variant(Variant.PERSONAL)
    assert removed is not None and removed.checkpoint == checkpoint
    assert hole.variants == {}
