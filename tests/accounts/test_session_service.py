import pytest

from shopclock.accounts.namespace import resolve_namespace
from shopclock.accounts.session import AppSession, SessionRepository, SessionService
from shopclock.accounts.service import LocalAccountService
from shopclock.core.constants import AUTH_SECRET_SERVICE, DEFAULT_NAMESPACE, FEDERATED_SECRET_ACCOUNT
from shopclock.core.exceptions import AuthenticationError, ValidationError
from shopclock.staff.model import Staff


def test_sign_in_switches_namespace_and_migrates_default(store, sessions):
    store.put_staff(Staff(id="S1", name="Alice"))

    session = sessions.sign_in("owner-1")

    assert session.current_account_id == "owner-1"
    assert store.namespace == resolve_namespace("owner-1")
    assert [s.id for s in store.list_staff()] == ["S1"]


def test_sign_out_returns_to_default(store, sessions, kv):
    sessions.sign_in("owner-1")
    store.put_staff(Staff(id="S9", name="Only mine"))

    sessions.sign_out()

    assert store.namespace == DEFAULT_NAMESPACE
    assert SessionRepository(kv).load().current_account_id is None
    assert "S9" not in [s.id for s in store.list_staff()]


def test_restore_reapplies_persisted_account(store, kv, secrets):
    SessionRepository(kv).save(AppSession(current_account_id="owner-2"))

    fresh = SessionService(store, SessionRepository(kv), secrets, LocalAccountService(kv))
    session = fresh.restore()

    assert session.current_account_id == "owner-2"
    assert store.namespace == resolve_namespace("owner-2")


def test_federated_sign_in_keeps_identifier_in_secret_store(sessions, secrets):
    sessions.sign_in("apple-user-1", federated=True)
    assert secrets.get_secret(AUTH_SECRET_SERVICE, FEDERATED_SECRET_ACCOUNT) == b"apple-user-1"
    assert sessions.federated_account_id() == "apple-user-1"

    sessions.sign_out()
    assert sessions.federated_account_id() is None


def test_local_sign_in_checks_password(store, sessions, kv):
    LocalAccountService(kv).register("shop", "pass1")

    with pytest.raises(AuthenticationError):
        sessions.sign_in_local("shop", "wrong")

    sessions.sign_in_local(" shop ", "pass1")
    assert store.namespace == resolve_namespace("shop")


def test_blank_account_rejected(sessions):
    with pytest.raises(ValidationError):
        sessions.sign_in("   ")


def test_unreadable_last_backup_date_is_ignored(kv):
    kv.set("lastAutoBackupDate", "yesterday-ish")
    assert SessionRepository(kv).load().last_auto_backup is None
