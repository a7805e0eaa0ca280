import pytest

from bookshop.activation.context import LaunchContext, LaunchKind
from bookshop.activation.handlers import CommandLineActivationHandler, DefaultActivationHandler
from bookshop.core.errors import ActivationFailed


@pytest.mark.asyncio
async def test_default_handler_opens_start_page(registry, navigation, config):
    config.update("general", "start_page", "Categories")
    navigation.navigate_to("Orders")

    await DefaultActivationHandler(registry).activate(LaunchContext())

    assert navigation.current_page_key == "Categories"
    assert not navigation.can_go_back


@pytest.mark.asyncio
async def test_default_handler_fails_for_unknown_start_page(registry, navigation, config):
    config.update("general", "start_page", "Nowhere")

    with pytest.raises(ActivationFailed):
        await DefaultActivationHandler(registry).activate(LaunchContext())

    assert navigation.current_page_key is None


@pytest.mark.asyncio
async def test_default_handler_keeps_page_on_reactivation(registry, navigation):
    navigation.navigate_to("Orders")

    await DefaultActivationHandler(registry).activate(LaunchContext(LaunchKind.REACTIVATION))

    assert navigation.current_page_key == "Orders"


def test_command_line_handler_needs_a_page_option(registry):
    handler = CommandLineActivationHandler(registry)

    assert handler.can_handle(LaunchContext(LaunchKind.COMMAND_LINE, ("--page", "Orders")))
    assert handler.can_handle(LaunchContext(LaunchKind.REACTIVATION, ("--page", "Orders")))
    assert not handler.can_handle(LaunchContext(LaunchKind.COMMAND_LINE, ("--config", "x.json")))
    assert not handler.can_handle(LaunchContext(LaunchKind.LAUNCH, ("--page", "Orders")))


@pytest.mark.asyncio
async def test_command_line_handler_navigates(registry, navigation):
    await CommandLineActivationHandler(registry).activate(
        LaunchContext(LaunchKind.COMMAND_LINE, ("--page", "Products"))
    )
    assert navigation.current_page_key == "Products"


@pytest.mark.asyncio
async def test_command_line_handler_fails_for_unknown_page(registry, navigation):
    with pytest.raises(ActivationFailed):
        await CommandLineActivationHandler(registry).activate(
            LaunchContext(LaunchKind.COMMAND_LINE, ("--page", "Secret"))
        )
