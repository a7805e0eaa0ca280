import json

import pytest

from bookshop.core.errors import RepositoryError
from bookshop.data.local import LocalShopRepository
from bookshop.data.models import Category, Order, OrderItem, Product


@pytest.mark.asyncio
async def test_empty_store_has_no_rows(local_repository):
    assert await local_repository.get_products() == []
    assert await local_repository.get_categories() == []
    assert await local_repository.get_orders() == []


@pytest.mark.asyncio
async def test_product_crud(local_repository):
    created = await local_repository.add_product(Product(name="Dune", author="Herbert", category_id=1))
    assert created.id == 1

    second = await local_repository.add_product(Product(name="Emma", author="Austen", category_id=1))
    assert second.id == 2

    updated = await local_repository.update_product(created.model_copy(update={"quantity": 7}))
    assert (await local_repository.get_product(1)).quantity == 7
    assert updated.quantity == 7

    assert await local_repository.delete_product(1) is True
    assert await local_repository.delete_product(1) is False
    assert [p.name for p in await local_repository.get_products()] == ["Emma"]


@pytest.mark.asyncio
async def test_changes_are_written_to_disk(tmp_path):
    path = tmp_path / "store.json"
    repository = LocalShopRepository(str(path))
    await repository.add_category(Category(name="Fiction"))
    await repository.add_order(Order(customer="Ann", items=[OrderItem(product_id=1, quantity=2, unit_price=3.0)]))

    reopened = LocalShopRepository(str(path))
    categories = await reopened.get_categories()
    orders = await reopened.get_orders()

    assert [c.name for c in categories] == ["Fiction"]
    assert orders[0].total == 6.0
    assert json.loads(path.read_text())["categories"][0]["id"] == 1


@pytest.mark.asyncio
async def test_updating_unknown_row_fails(local_repository):
    with pytest.raises(RepositoryError):
        await local_repository.update_category(Category(id=99, name="Ghost"))


@pytest.mark.asyncio
async def test_corrupt_store_is_reported(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")

    with pytest.raises(RepositoryError):
        await LocalShopRepository(str(path)).get_products()
