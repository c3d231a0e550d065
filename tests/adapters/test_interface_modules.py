"""Ensure adapter modules expose the expected entry points."""

from importlib import import_module

import pytest


@pytest.mark.parametrize(
    "package",
    ["src.adapters.interface", "src.adapters.interface.streamlit"],
)
def test_interface_packages_export_nothing(package: str) -> None:
    assert import_module(package).__all__ == []


@pytest.mark.parametrize(
    "module",
    [
        "src.adapters.prepare_schema_cli",
        "src.adapters.ledger_report_cli",
        "src.adapters.test_db_connection",
        "src.adapters.interface.streamlit.app",
    ],
)
def test_adapters_define_main(module: str) -> None:
    assert callable(import_module(module).main)
