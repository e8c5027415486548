"""Tests for restaurant repository and storefront service"""
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

from qsr.errors import ConfigurationError
from qsr.services.menu_images import menu_image_path, upload_menu_image
from qsr.services.repositories import RestaurantRepository
from qsr.services.storefront import StorefrontService

NOON = datetime(2025, 3, 15, 12, 0)
MIDNIGHT = datetime(2025, 3, 15, 0, 30)


@pytest.fixture
def repository(mock_supabase_client):
    return RestaurantRepository(mock_supabase_client)


@pytest.mark.asyncio
async def test_get_restaurant(repository, mock_supabase_client, sample_restaurant):
    mock_supabase_client.table.return_value.execute.return_value.data = [sample_restaurant]

    restaurant = await repository.get_restaurant("rest-123")

    assert restaurant is not None
    assert restaurant.name == "Chai Point"
    mock_supabase_client.table.assert_called_with("restaurants")
    mock_supabase_client.table.return_value.eq.assert_called_with("id", "rest-123")


@pytest.mark.asyncio
async def test_get_restaurant_not_found(repository, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value.data = []

    assert await repository.get_restaurant("missing") is None


@pytest.mark.asyncio
async def test_get_menu(repository, mock_supabase_client, sample_menu):
    mock_supabase_client.table.return_value.execute.return_value.data = sample_menu

    menu = await repository.get_menu("rest-123")

    assert [item.id for item in menu] == ["item-tea", "item-samosa"]
    assert menu[1].price == Decimal("15.50")
    mock_supabase_client.table.return_value.order.assert_called_with("sort_order")
    mock_supabase_client.table.return_value.eq.assert_any_call("available", True)


@pytest.mark.asyncio
async def test_get_menu_item(repository, mock_supabase_client, sample_menu):
    mock_supabase_client.table.return_value.execute.return_value.data = [sample_menu[1]]

    item = await repository.get_menu_item("rest-123", "item-samosa")

    assert item.name == "Samosa"
    assert item.price == Decimal("15.50")
    table = mock_supabase_client.table.return_value
    table.eq.assert_any_call("id", "item-samosa")
    table.eq.assert_any_call("restaurant_id", "rest-123")
    table.eq.assert_any_call("available", True)


@pytest.mark.asyncio
async def test_get_menu_item_unavailable(repository, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value.data = []

    assert await repository.get_menu_item("rest-123", "item-sold-out") is None


@pytest.mark.asyncio
async def test_get_menu_error_returns_empty(repository, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.side_effect = RuntimeError("boom")

    assert await repository.get_menu("rest-123") == []


@pytest.mark.asyncio
async def test_load_menu_when_open(repository, mock_supabase_client, sample_restaurant, sample_menu):
    mock_supabase_client.table.return_value.execute.side_effect = [
        Mock(data=[sample_restaurant]),
        Mock(data=sample_menu),
    ]

    view = await StorefrontService(repository).load_menu("rest-123", now=NOON)

    assert view.availability.available is True
    assert len(view.menu) == 2


@pytest.mark.asyncio
async def test_load_menu_when_closed_skips_query(repository, mock_supabase_client, sample_restaurant):
    mock_supabase_client.table.return_value.execute.return_value.data = [sample_restaurant]

    view = await StorefrontService(repository).load_menu("rest-123", now=MIDNIGHT)

    assert view.availability.available is False
    assert view.availability.next_open_time == "09:00:00"
    assert view.menu == []
    mock_supabase_client.table.assert_called_once_with("restaurants")


@pytest.mark.asyncio
async def test_load_restaurant_unknown(repository, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value.data = []

    view = await StorefrontService(repository).load_restaurant("missing", now=NOON)

    assert view.restaurant is None
    assert view.availability.available is False
    assert view.availability.next_open_time is None


@pytest.mark.asyncio
async def test_load_restaurant_bad_schedule(repository, mock_supabase_client, sample_restaurant):
    mock_supabase_client.table.return_value.execute.return_value.data = [
        {**sample_restaurant, "opening_time": "nine"}
    ]

    with pytest.raises(ConfigurationError):
        await StorefrontService(repository).load_restaurant("rest-123", now=NOON)


def test_menu_image_path():
    assert menu_image_path("rest-1", "item-1", "photo.JPG") == "rest-1/item-1.JPG"
    assert menu_image_path("rest-1", "item-1", "menu.v2.webp") == "rest-1/item-1.webp"
    assert menu_image_path("rest-1", "item-1", "photo") == "rest-1/item-1.photo"


def test_upload_menu_image():
    client = Mock()
    bucket = client.storage.from_.return_value
    bucket.get_public_url.return_value = "https://cdn.test/menu-images/rest-1/item-1.png"

    url = upload_menu_image(client, b"png-bytes", "tea.png", "image/png", "rest-1", "item-1")

    assert url == "https://cdn.test/menu-images/rest-1/item-1.png"
    client.storage.from_.assert_called_with("menu-images")
    bucket.upload.assert_called_once_with(
        "rest-1/item-1.png",
        b"png-bytes",
        {"content-type": "image/png", "upsert": "true"},
    )


def test_upload_menu_image_propagates_errors():
    client = Mock()
    client.storage.from_.return_value.upload.side_effect = RuntimeError("bucket missing")

    with pytest.raises(RuntimeError):
        upload_menu_image(client, b"x", "tea.png", "image/png", "rest-1", "item-1")
