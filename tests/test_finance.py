import pytest

from screens.finance import payment_methods as pm
from screens.finance.constants import PAYMENT_DETAIL_FIELDS, PAYMENT_INSTRUCTIONS, PAYMENT_TYPES
from screens.finance.fee_payment import instructions_for, payment_modes


def test_every_payment_type_has_detail_fields():
    assert set(PAYMENT_TYPES) == set(PAYMENT_DETAIL_FIELDS)


def test_validate_method():
    assert pm.validate_method("Cheque", {}) == {"type": "Please select a type"}
    assert pm.validate_method("Mpesa", {"Paybill": "123"}) == {"details": "Please fill in: Account Number"}
    assert pm.validate_method("PayPal", {"PayPal Email": "fees@school.org"}) == {}


def test_add_method_newest_first(store):
    first = pm.add_method("Card", {"Accepted Cards": "Visa"}, store=store)
    second = pm.add_method("Mpesa", {"Paybill": " 400200 ", "Account Number": "GH-01", "Extra": "x"}, store=store)
    methods = pm.list_methods(store)
    assert [m.id for m in methods] == [second.id, first.id]
    assert second.details == {"Paybill": "400200", "Account Number": "GH-01"}


def test_add_invalid_method_raises(store):
    with pytest.raises(ValueError, match="Please fill in"):
        pm.add_method("Airtel", {"Airtel Number": "0733"}, store=store)
    assert pm.list_methods(store) == []


def test_toggle_and_remove(store):
    method = pm.add_method("Card", {"Accepted Cards": "Visa"}, store=store)
    assert pm.set_active(method.id, False, store=store)
    assert pm.list_methods(store)[0].active is False
    assert pm.set_active("missing", True, store=store) is False
    assert pm.remove_method(method.id, store=store)
    assert pm.remove_method(method.id, store=store) is False


def test_filter_methods(store):
    pm.add_method("Card", {"Accepted Cards": "Visa"}, store=store)
    pm.add_method("Bank Transfer", {"Bank Name": "KCB", "Bank Account Number": "1"}, store=store)
    assert [m.type for m in pm.filter_methods(pm.list_methods(store), "bank")] == ["Bank Transfer"]
    assert len(pm.filter_methods(pm.list_methods(store), "")) == 2


def test_fee_instructions_are_numbered():
    modes = payment_modes()
    assert len(modes) == len(PAYMENT_INSTRUCTIONS)
    steps = instructions_for("Pesalink")
    assert steps[0] == "1. Log in to your mobile banking, USSD or internet banking platform"
    assert steps[-1].startswith(f"{len(steps)}. ")
    with pytest.raises(KeyError):
        instructions_for("Carrier pigeon")
