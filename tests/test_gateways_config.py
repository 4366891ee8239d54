import pytest
from pydantic import ValidationError
from kungfu import Ok, Error

from checkout.config import CheckoutSettings, get_settings
from checkout.domain import History
from checkout.errors import NetworkError
from checkout.gateways import gateways_from
from checkout.lift import from_collaborator


async def test_missing_gateway_function_raises_not_implemented():
    gateways = gateways_from()
    with pytest.raises(NotImplementedError, match="get_history"):
        await gateways.history.get_history_by_product_id("u-1", "p-1")


async def test_configured_function_is_called():
    async def get_history(user_id, product_id):
        return History()

    gateways = gateways_from(get_history=get_history)
    assert await gateways.history.get_history_by_product_id("u-1", "p-1") == History()


async def test_collaborator_exception_becomes_network_error():
    async def boom():
        raise ValueError

    result = await from_collaborator("resolve_coupon", boom)
    assert result == Error(NetworkError("resolve_coupon", "ValueError"))


async def test_collaborator_call_is_lazy():
    calls: list[str] = []

    async def resolve():
        calls.append("resolve")
        return "HEMAT10"

    pending = from_collaborator("resolve_coupon", resolve)
    assert calls == []

    assert await pending == Ok("HEMAT10")
    assert calls == ["resolve"]


def test_settings_defaults():
    settings = CheckoutSettings()
    assert settings.min_phone_length == 10
    assert settings.redirect_delay_seconds == 1.5
    assert settings.tolerate_invalid_password
    assert settings.tolerated_sign_in_error == "Invalid password"
    assert settings.currency_symbol == "Rp"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CHECKOUT_MIN_PHONE_LENGTH", "8")
    monkeypatch.setenv("CHECKOUT_TOLERATE_INVALID_PASSWORD", "false")

    settings = CheckoutSettings()

    assert settings.min_phone_length == 8
    assert not settings.tolerate_invalid_password


def test_settings_reject_negative_delay():
    with pytest.raises(ValidationError):
        CheckoutSettings(redirect_delay_seconds=-1)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
