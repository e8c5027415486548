"""Tests for cart persistence slots"""
import json
import pytest
from unittest.mock import patch

from qsr.cart import CartSession, CartState, MemorySlot, RedisSlot, MenuItemRef
from qsr.cart.storage import dump_state, load_state
from qsr.db import RedisKeys, TTL
from qsr.errors import PersistenceReadFailure


def test_redis_key_is_scoped_by_session():
    assert RedisKeys.cart_key("abc123") == "qsr_cart:abc123"


def test_redis_slot_write_uses_session_ttl(fake_redis):
    slot = RedisSlot("sess-1", redis=fake_redis)

    slot.write('{"x": 1}')

    fake_redis.set.assert_called_once_with("qsr_cart:sess-1", '{"x": 1}', ex=TTL.CART)
    assert slot.read() == '{"x": 1}'


def test_redis_slot_read_decodes_bytes(fake_redis):
    fake_redis.store["qsr_cart:sess-1"] = b'{"x": 1}'

    assert RedisSlot("sess-1", redis=fake_redis).read() == '{"x": 1}'


def test_redis_slot_delete(fake_redis):
    slot = RedisSlot("sess-1", redis=fake_redis)
    slot.write("payload")

    slot.delete()

    assert slot.read() is None


def test_redis_slot_requires_session_id():
    with pytest.raises(ValueError):
        RedisSlot("")


def test_redis_slot_lazy_client(fake_redis):
    with patch("qsr.cart.storage.get_redis_sync", return_value=fake_redis) as get_redis:
        slot = RedisSlot("sess-1")
        get_redis.assert_not_called()

        slot.write("payload")

        get_redis.assert_called_once()


def test_sessions_do_not_share_redis_slots(fake_redis):
    first = CartSession(RedisSlot("sess-1", redis=fake_redis))
    second = CartSession(RedisSlot("sess-2", redis=fake_redis))

    first.init_cart("rest-1", "dine_in")
    first.add_item(MenuItemRef(item_id="a", name="Tea", price=20))

    assert second.init_cart("rest-1", "dine_in").items == ()
    assert len(CartSession(RedisSlot("sess-1", redis=fake_redis)).init_cart("rest-1", "dine_in").items) == 1


def test_load_state_empty_slot():
    assert load_state(MemorySlot()) is None


def test_load_state_round_trip():
    cart = CartState.empty("rest-1", "takeaway").with_mobile_number("555")
    slot = MemorySlot()
    slot.write(dump_state(cart))

    assert load_state(slot) == cart


def test_load_state_corrupt_payload():
    slot = MemorySlot(initial="{oops")

    with pytest.raises(PersistenceReadFailure) as exc_info:
        load_state(slot)

    assert exc_info.value.code == "PERSISTENCE_READ"
    assert isinstance(exc_info.value.raw_error, json.JSONDecodeError)


def test_redis_slots_share_lock_per_key(fake_redis):
    first = RedisSlot("sess-1", redis=fake_redis)

    assert RedisSlot("sess-1", redis=fake_redis).lock is first.lock
    assert RedisSlot("sess-2", redis=fake_redis).lock is not first.lock
