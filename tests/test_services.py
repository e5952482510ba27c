from __future__ import annotations

import og
from og import services as services_module
from og.context import ReturnMode


def test_no_process_wide_services():
    assert not hasattr(og, "get_default_services")
    assert not hasattr(services_module, "get_default_services")
    assert not hasattr(services_module, "set_default_services")


def test_containers_are_independent(services_factory):
    first = services_factory()
    second = services_factory()

    first.context_handler.update_plugin("entity", {"status": 1})

    assert list(first.context_handler.get_plugins(ReturnMode.ONLY_ACTIVE)) == ["entity"]
    assert second.context_handler.get_plugins(ReturnMode.ONLY_ACTIVE) == {}


def test_read_only_container_can_be_built_and_read(services_factory):
    services = services_factory(read_only=True, install=False)

    assert services.context_handler.get_plugins(ReturnMode.ONLY_ACTIVE) == {}
    assert set(services.context_handler.get_plugins(ReturnMode.ALL)) == {"entity", "current_user"}
