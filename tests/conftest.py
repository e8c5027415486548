"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    # Mock table operations
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock

    client.table.return_value = table_mock

    return client


@pytest.fixture
def sample_restaurant():
    """Sample restaurant row"""
    return {
        "id": "rest-123",
        "name": "Chai Point",
        "logo_url": None,
        "address": "MG Road",
        "opening_time": "09:00:00",
        "closing_time": "22:00:00",
        "is_available": True,
        "unavailable_message": None,
    }


@pytest.fixture
def sample_menu():
    """Sample menu_items rows"""
    return [
        {
            "id": "item-tea",
            "restaurant_id": "rest-123",
            "name": "Masala Tea",
            "price": 20,
            "image_url": None,
            "available": True,
            "sort_order": 1,
        },
        {
            "id": "item-samosa",
            "restaurant_id": "rest-123",
            "name": "Samosa",
            "price": "15.50",
            "image_url": "https://cdn.test/samosa.png",
            "available": True,
            "sort_order": 2,
        },
    ]


@pytest.fixture
def fake_redis():
    """Dict-backed stand-in for the Upstash Redis client"""
    store = {}
    redis = Mock()
    redis.store = store
    redis.get.side_effect = lambda key: store.get(key)
    redis.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    redis.delete.side_effect = lambda key: store.pop(key, None)
    return redis
