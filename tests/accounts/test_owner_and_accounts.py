import pytest

from shopclock.accounts.secret_store import KeyValueSecretStore
from shopclock.accounts.service import LocalAccountService, OwnerAuthService
from shopclock.common.validators import is_strong_password
from shopclock.core.exceptions import AuthenticationError, NotFoundError, ValidationError


@pytest.mark.parametrize(
    "password, ok",
    [("abc123!x", True), ("short1!", False), ("abcdefgh1", False), ("abcdefg!", False), ("12345678!", False)],
)
def test_strong_password_rule(password, ok):
    assert is_strong_password(password) is ok


def test_owner_password_lifecycle(secrets):
    owner = OwnerAuthService(secrets)
    assert not owner.has_password()
    assert not owner.verify("anything")

    with pytest.raises(ValidationError):
        owner.set_password("weak")

    owner.set_password("s3cret!pw")
    assert owner.has_password()
    assert owner.verify("s3cret!pw")
    assert not owner.verify("s3cret!pX")
    with pytest.raises(AuthenticationError):
        owner.require("nope")

    assert owner.clear()
    assert not owner.has_password()


def test_local_accounts(kv):
    accounts = LocalAccountService(kv)

    assert accounts.register("  shop  ", "abcd") == "shop"
    assert accounts.exists("shop")
    assert accounts.verify("shop", "abcd")
    assert not accounts.verify("shop", "abce")
    assert not accounts.verify("ghost", "abcd")

    with pytest.raises(ValidationError):
        accounts.register("shop", "efgh")
    with pytest.raises(ValidationError):
        accounts.register("", "efgh")
    with pytest.raises(ValidationError):
        accounts.register("other", "abc")

    accounts.set_password("shop", "zzzz")
    assert accounts.verify("shop", "zzzz")
    with pytest.raises(NotFoundError):
        accounts.set_password("ghost", "zzzz")


def test_kv_secret_store_round_trip(kv):
    secrets = KeyValueSecretStore(kv)
    assert secrets.get_secret("svc", "acct") is None

    secrets.set_secret("svc", "acct", b"\x00\xffhash")
    assert secrets.get_secret("svc", "acct") == b"\x00\xffhash"
    assert secrets.delete_secret("svc", "acct")
    assert not secrets.delete_secret("svc", "acct")
