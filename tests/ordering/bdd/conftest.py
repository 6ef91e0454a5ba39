"""Shared BDD fixtures and step definitions for nth-order discounts."""

import pytest
from ordering.catalog.stocking import add_catalog_item
from ordering.discount.issuance import issue_code
from pytest_bdd import given, parsers


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog():
    return {}


@pytest.fixture()
def receipts():
    """Receipts of the orders placed in a scenario, in placement order."""
    return []


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalog has "{item_name}" priced at {price:d} paise with {qty:d} in stock'))
def _(catalog, item_name, price, qty):
    catalog[item_name] = add_catalog_item(item_name=item_name, price_in_paise=price, available_qty=qty)


@given(parsers.cfparse("every {period:d}rd order is discounted"))
def _(monkeypatch, period):
    monkeypatch.setenv("NTH_ORDER_COUNT", str(period))


@given(parsers.cfparse("an issued discount code worth {percent:d} percent"), target_fixture="issued_code")
def _(percent):
    return issue_code(discount_percent=percent)
