from __future__ import annotations

import sys


def test_cli_import_does_not_build_registry() -> None:
    before_modules = set(sys.modules)
    import cli  # noqa: F401

    newly_imported = set(sys.modules) - before_modules
    assert "contract.abi" not in newly_imported


def test_contract_package_import_is_side_effect_free() -> None:
    import contract

    assert "WAREHOUSE_ABI" not in vars(contract)
    assert "ERC20_ABI" not in vars(contract)
