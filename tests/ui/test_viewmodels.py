"""
Page view-models against a local repository.
"""
import asyncio

import pytest
import pytest_asyncio

from bookshop.data.models import Category, Order, OrderItem, Product
from bookshop.ui.mvvm.viewmodel import BaseViewModel
from bookshop.ui.navigation.pages import Pages
from bookshop.ui.navigation.parameters import ProductParameter, UpsertProductParameter
from bookshop.ui.navigation.service import NavigationService
from bookshop.ui.viewmodels import (
    CategoriesViewModel,
    CreateOrderViewModel,
    DashboardViewModel,
    OrdersViewModel,
    ProductDetailViewModel,
    ProductsViewModel,
    SettingsViewModel,
    UpsertProductViewModel,
)


async def seed(repository):
    fiction = await repository.add_category(Category(name="Fiction"))
    dune = await repository.add_product(Product(
        name="Dune", author="Frank Herbert", category_id=fiction.id,
        price=9.5, quantity=2, image="dune.png"))
    await repository.add_product(Product(
        name="Emma", author="Jane Austen", category_id=fiction.id,
        price=7.0, quantity=12, image="emma.png"))
    await repository.add_order(Order(customer="Ann", items=[
        OrderItem(product_id=dune.id, quantity=2, unit_price=9.5)]))
    await repository.add_order(Order(customer="Bob", status="shipped", items=[
        OrderItem(product_id=dune.id, quantity=1, unit_price=10.0)]))
    return fiction, dune


# --- BaseViewModel ---

class SleepyViewModel(BaseViewModel):
    pass


@pytest.mark.asyncio
async def test_leaving_the_page_cancels_pending_tasks(qapp, app_registry):
    vm = SleepyViewModel(app_registry)
    task = vm.run_async(asyncio.sleep(10))
    assert vm.pending_tasks == 1

    vm.on_navigated_from()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert vm.pending_tasks == 0
    assert vm.error_message == ""


@pytest.mark.asyncio
async def test_failed_task_sets_error_message(qapp, app_registry):
    vm = SleepyViewModel(app_registry)
    messages = []
    vm.errorChanged.connect(messages.append)

    async def boom():
        raise RuntimeError("store offline")

    task = vm.run_async(boom())
    with pytest.raises(RuntimeError):
        await task
    await asyncio.sleep(0)

    assert vm.error_message == "store offline"
    assert messages == ["store offline"]


# --- Dashboard ---

@pytest.mark.asyncio
async def test_dashboard_summary(qapp, app_registry, local_repository):
    await seed(local_repository)
    vm = app_registry.resolve(DashboardViewModel)

    await vm.load()

    assert vm.summary["products"] == 2
    assert vm.summary["categories"] == 1
    assert vm.summary["orders"] == 2
    assert vm.summary["revenue"] == pytest.approx(29.0)
    assert vm.summary["low_stock"] == ["Dune"]
    assert vm.is_busy is False


# --- Products ---

@pytest.mark.asyncio
async def test_products_search_filters_by_name_or_author(qapp, app_registry, local_repository):
    await seed(local_repository)
    vm = app_registry.resolve(ProductsViewModel)
    await vm.load()

    vm.set_search_text("austen")
    assert [p.name for p in vm.products] == ["Emma"]

    vm.set_search_text("")
    assert len(vm.products) == 2


@pytest.mark.asyncio
async def test_open_product_navigates_to_detail(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    navigation = app_registry.resolve(NavigationService)
    navigation.navigate_to(Pages.PRODUCTS)
    products_vm = navigation.current_view_model

    assert products_vm.open_product(dune) is True

    assert navigation.current_page_key == Pages.PRODUCT_DETAIL
    assert navigation.current_parameter == ProductParameter(dune)
    assert navigation.current_view_model.product == dune
    assert navigation.back_stack[-1].page_key == Pages.PRODUCTS
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_delete_product_returns_to_previous_page(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    navigation = app_registry.resolve(NavigationService)
    navigation.navigate_to(Pages.PRODUCTS)
    navigation.navigate_to(Pages.PRODUCT_DETAIL, ProductParameter(dune))
    detail_vm = navigation.current_view_model
    assert isinstance(detail_vm, ProductDetailViewModel)

    assert await detail_vm.delete() is True

    assert navigation.current_page_key == Pages.PRODUCTS
    assert await local_repository.get_product(dune.id) is None
    await asyncio.sleep(0)


# --- Upsert product ---

@pytest_asyncio.fixture
async def upsert_vm(qapp, app_registry, local_repository):
    await seed(local_repository)
    vm = app_registry.resolve(UpsertProductViewModel)
    vm.on_navigated_to(UpsertProductParameter(products=await local_repository.get_products()))
    await vm.load_categories()
    return vm


@pytest.mark.asyncio
async def test_upsert_requires_an_image(upsert_vm):
    upsert_vm.update_item(name="Ulysses", author="James Joyce", category_id=1)

    assert upsert_vm.validate() == (False, "Must choose a product image")


@pytest.mark.asyncio
async def test_upsert_requires_all_fields(upsert_vm):
    upsert_vm.set_image("ulysses.png")
    upsert_vm.update_item(name="Ulysses")

    assert upsert_vm.validate() == (False, "Must fill all required fields")


@pytest.mark.asyncio
async def test_upsert_rejects_duplicates(upsert_vm):
    upsert_vm.set_image("copy.png")
    upsert_vm.update_item(name=" dune ", author="FRANK HERBERT", category_id=1)

    assert upsert_vm.validate() == (False, "Product is already existed")
    assert await upsert_vm.save() is False
    assert upsert_vm.error_message == "Product is already existed"


@pytest.mark.asyncio
async def test_upsert_saves_new_product(upsert_vm, local_repository):
    upsert_vm.set_image("ulysses.png")
    upsert_vm.update_item(name="Ulysses", author="James Joyce", category_id=1, price=12.0)

    assert upsert_vm.category_name(1) == "Fiction"
    assert await upsert_vm.save() is True

    stored = await local_repository.get_product(upsert_vm.item.id)
    assert stored.name == "Ulysses"
    assert upsert_vm.error_message == ""


@pytest.mark.asyncio
async def test_editing_a_product_is_not_a_duplicate_of_itself(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    vm = app_registry.resolve(UpsertProductViewModel)
    vm.on_navigated_to(UpsertProductParameter(
        products=await local_repository.get_products(), product=dune))
    await vm.load_categories()

    vm.update_item(price=11.0)

    assert not vm.is_new
    assert vm.validate() == (True, "")
    assert await vm.save() is True
    assert (await local_repository.get_product(dune.id)).price == 11.0


# --- Categories ---

@pytest.mark.asyncio
async def test_categories_add_and_reject_duplicates(qapp, app_registry):
    vm = app_registry.resolve(CategoriesViewModel)
    await vm.load()

    assert await vm.add_category("Poetry") is True
    assert await vm.add_category("poetry") is False
    assert "already exists" in vm.error_message
    assert await vm.add_category("   ") is False
    assert vm.error_message == "Category name is required"

    assert [c.name for c in vm.categories] == ["Poetry"]


@pytest.mark.asyncio
async def test_categories_delete(qapp, app_registry, local_repository):
    fiction, _ = await seed(local_repository)
    vm = app_registry.resolve(CategoriesViewModel)
    await vm.load()

    assert await vm.delete_category(fiction) is True
    assert vm.categories == ()
    assert await vm.delete_category(fiction) is False


# --- Orders ---

@pytest.mark.asyncio
async def test_orders_filter_and_status_change(qapp, app_registry, local_repository):
    await seed(local_repository)
    vm = app_registry.resolve(OrdersViewModel)
    changes = []
    vm.propertyChanged.connect(lambda name, value: changes.append((name, value)))
    await vm.load()
    assert vm.revenue == pytest.approx(29.0)
    assert changes[-1] == ("revenue", pytest.approx(29.0))

    vm.filter_by_status("shipped")
    assert [o.customer for o in vm.orders] == ["Bob"]

    ann = next(o for o in await local_repository.get_orders() if o.customer == "Ann")
    await vm.set_status(ann, "shipped")

    assert sorted(o.customer for o in vm.orders) == ["Ann", "Bob"]


# --- Settings ---

@pytest.mark.asyncio
async def test_settings_save_persists_to_config(qapp, app_registry, config):
    vm = app_registry.resolve(SettingsViewModel)
    vm.on_navigated_to(None)
    assert vm.start_page == "Dashboard"
    assert "Local store" in vm.active_repository

    vm.start_page = "Orders"
    vm.repository_mode = "local"

    assert vm.save() is True
    assert config.get("general", "start_page") == "Orders"
    assert config.get("repository", "mode") == "local"


@pytest.mark.asyncio
async def test_settings_refuse_unknown_values(qapp, app_registry, config):
    vm = app_registry.resolve(SettingsViewModel)
    vm.on_navigated_to(None)

    vm.start_page = Pages.PRODUCT_DETAIL
    assert vm.save() is False
    assert "Unknown start page" in vm.error_message

    vm.start_page = "Orders"
    vm.repository_mode = "carrier-pigeon"
    assert vm.save() is False
    assert config.get("repository", "mode") != "carrier-pigeon"


@pytest.mark.asyncio
async def test_editing_from_detail_still_checks_duplicates(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    navigation = app_registry.resolve(NavigationService)
    navigation.navigate_to(Pages.PRODUCT_DETAIL, ProductParameter(dune))

    assert await navigation.current_view_model.edit() is True

    form = navigation.current_view_model
    assert isinstance(form, UpsertProductViewModel)
    form.update_item(name="Emma", author="Jane Austen")
    assert form.validate() == (False, "Product is already existed")
    await asyncio.sleep(0)


# --- Create order ---

@pytest.mark.asyncio
async def test_orders_page_opens_the_order_form(qapp, app_registry, local_repository):
    navigation = app_registry.resolve(NavigationService)
    navigation.navigate_to(Pages.ORDERS)

    assert navigation.current_view_model.create_order() is True

    assert navigation.current_page_key == Pages.CREATE_ORDER
    assert isinstance(navigation.current_view_model, CreateOrderViewModel)
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_create_order_validates_the_form(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    vm = app_registry.resolve(CreateOrderViewModel)
    vm.on_navigated_to(None)
    await vm.load()

    assert vm.validate() == (False, "Customer name is required")
    vm.customer = "Cleo"
    assert vm.validate() == (False, "Add at least one product")
    vm.add_item(dune, 3)
    assert vm.validate() == (False, "Only 2 of Dune in stock")
    assert await vm.submit() is False
    assert vm.error_message == "Only 2 of Dune in stock"


@pytest.mark.asyncio
async def test_create_order_stores_order_and_updates_stock(qapp, app_registry, local_repository):
    _, dune = await seed(local_repository)
    navigation = app_registry.resolve(NavigationService)
    navigation.navigate_to(Pages.ORDERS)
    navigation.navigate_to(Pages.CREATE_ORDER)
    vm = navigation.current_view_model
    await vm.load()

    vm.customer = "Cleo"
    vm.add_item(dune)
    vm.add_item(dune)
    assert vm.total == pytest.approx(19.0)

    assert await vm.submit() is True

    orders = await local_repository.get_orders()
    placed = next(o for o in orders if o.customer == "Cleo")
    assert [(i.product_id, i.quantity, i.unit_price) for i in placed.items] == [(dune.id, 2, 9.5)]
    assert (await local_repository.get_product(dune.id)).quantity == 0
    assert navigation.current_page_key == Pages.ORDERS
    await asyncio.sleep(0)
