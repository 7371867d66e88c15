from datetime import datetime, timezone

import pytest

from discord_entities.core.errors import DetachedEntityError
from discord_entities.core.transport import CompiledRoute
from discord_entities.entities import Entitlement, EntitlementType, Sku, SkuFlag, SkuType


def _entitlement_payload(**overrides):
    payload = {
        "id": "1019653849998299136",
        "sku_id": "1019475255913222144",
        "application_id": "1019370614521200640",
        "user_id": "771129655544643584",
        "type": 8,
        "deleted": False,
        "starts_at": "2022-09-14T17:00:18.704163+00:00",
        "ends_at": "2022-10-14T17:00:18.704163+00:00",
        "consumed": False,
    }
    payload.update(overrides)
    return payload


def test_entitlement_from_payload() -> None:
    entitlement = Entitlement.from_payload(_entitlement_payload())
    assert entitlement.type is EntitlementType.APPLICATION_SUBSCRIPTION
    assert entitlement.user_id == 771129655544643584
    assert not entitlement.is_guild_entitlement
    assert entitlement.is_active(datetime(2022, 10, 1, tzinfo=timezone.utc))
    assert not entitlement.is_active(datetime(2022, 11, 1, tzinfo=timezone.utc))
    assert not entitlement.is_active(datetime(2022, 9, 1, tzinfo=timezone.utc))


def test_test_entitlements_are_always_active() -> None:
    entitlement = Entitlement.from_payload(
        _entitlement_payload(type=4, starts_at=None, ends_at=None, guild_id="3")
    )
    assert entitlement.type is EntitlementType.TEST_MODE_PURCHASE
    assert entitlement.is_guild_entitlement
    assert entitlement.is_active(datetime(2030, 1, 1, tzinfo=timezone.utc))
    deleted = Entitlement.from_payload(_entitlement_payload(deleted=True))
    assert not deleted.is_active(datetime(2022, 10, 1, tzinfo=timezone.utc))


@pytest.mark.anyio
async def test_consume(transport) -> None:
    entitlement = Entitlement.from_payload(_entitlement_payload(), transport=transport)
    await entitlement.consume()
    assert transport.last_call == (
        CompiledRoute(
            "POST",
            "applications/1019370614521200640/entitlements/1019653849998299136/consume",
        ),
        None,
        None,
    )
    with pytest.raises(DetachedEntityError):
        await Entitlement.from_payload(_entitlement_payload()).consume()


def test_sku_from_payload() -> None:
    sku = Sku.from_payload(
        {
            "id": "1088510058284990888",
            "type": 5,
            "application_id": "788708323867885999",
            "name": "Test Premium",
            "slug": "test-premium",
            "flags": 128 | 4,
        }
    )
    assert sku.type is SkuType.SUBSCRIPTION
    assert sku.is_subscription
    assert sku.flags == frozenset({SkuFlag.GUILD_SUBSCRIPTION, SkuFlag.AVAILABLE})
    assert sku.is_available
    consumable = Sku.from_payload(
        {"id": "1", "application_id": "2", "name": "Gems", "type": 3}
    )
    assert not consumable.is_subscription
    assert not consumable.is_available
    assert consumable.slug == ""
