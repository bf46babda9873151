import uuid

import pytest

from sensorhub.access.predicates import Entitlement
from sensorhub.core.errors import AccessDenied, MalformedInput, NotFound
from sensorhub.models import AppRole, Profile, SubscriptionTier, UserRole
from sensorhub.services import profile_service, role_service


def test_provision_twice_yields_single_free_profile(db):
    identity = uuid.uuid4()

    first = profile_service.provision_profile(db, identity, email="ana@example.com")
    second = profile_service.provision_profile(db, identity, email="ana@example.com")

    assert first.id == second.id == identity
    assert db.query(Profile).filter(Profile.id == identity).count() == 1
    assert second.subscription_tier == SubscriptionTier.FREE
    assert second.is_admin is False
    assert second.display_name == "ana@example.com"


def test_provision_does_not_reset_existing_profile(db, make_caller):
    admin = make_caller(admin=True)
    identity = uuid.uuid4()
    profile_service.provision_profile(db, identity)
    profile_service.set_tier(db, admin, identity, "premium")

    again = profile_service.provision_profile(db, identity)

    assert again.subscription_tier == SubscriptionTier.PREMIUM


def test_set_tier_requires_admin(db, make_caller):
    premium = make_caller(tier=SubscriptionTier.PREMIUM)
    target = make_caller()

    with pytest.raises(AccessDenied):
        profile_service.set_tier(db, premium, target.identity, SubscriptionTier.PREMIUM)


def test_set_tier_rejects_unknown_tier(db, make_caller):
    admin = make_caller(admin=True)
    target = make_caller()

    with pytest.raises(MalformedInput):
        profile_service.set_tier(db, admin, target.identity, "gold")


def test_set_tier_unknown_profile(db, make_caller):
    admin = make_caller(admin=True)
    with pytest.raises(NotFound):
        profile_service.set_tier(db, admin, uuid.uuid4(), SubscriptionTier.PREMIUM)


def test_set_admin_does_not_touch_roles(db, make_caller):
    admin = make_caller(admin=True)
    target = make_caller()

    perfil = profile_service.set_admin(db, admin, target.identity, True)

    assert perfil.is_admin is True
    assert db.query(UserRole).filter(UserRole.user_id == target.identity).count() == 0


def test_grant_role_is_idempotent_and_revocable(db, make_caller):
    admin = make_caller(admin=True)
    target = make_caller()

    first = role_service.grant_role(db, admin, target.identity, "user")
    second = role_service.grant_role(db, admin, target.identity, AppRole.USER)
    role_service.grant_role(db, admin, target.identity, AppRole.ADMIN)

    assert first.id == second.id
    assert {r.role for r in role_service.list_roles(db, target.identity)} == {AppRole.USER, AppRole.ADMIN}

    role_service.revoke_role(db, admin, target.identity, "admin")
    assert [r.role for r in role_service.list_roles(db, target.identity)] == [AppRole.USER]

    with pytest.raises(NotFound):
        role_service.revoke_role(db, admin, target.identity, "admin")


def test_role_changes_require_admin_flag(db, make_caller):
    target = make_caller()
    # role "admin" sem a flag não dá privilégio
    role_holder = Entitlement(identity=target.identity, roles=frozenset({AppRole.ADMIN}))

    with pytest.raises(AccessDenied):
        role_service.grant_role(db, role_holder, target.identity, AppRole.USER)


def test_grant_role_rejects_invalid_role(db, make_caller):
    admin = make_caller(admin=True)
    with pytest.raises(MalformedInput):
        role_service.grant_role(db, admin, admin.identity, "owner")


def test_create_admin_grants_flag_and_role(db, monkeypatch):
    from sensorhub import create_admin

    from .conftest import TestingSessionLocal

    monkeypatch.setattr(create_admin, "SessionLocal", TestingSessionLocal)
    identity = uuid.uuid4()

    create_admin.promover(identity, "root@example.com")
    create_admin.promover(identity)

    db.expire_all()
    perfil = db.get(Profile, identity)
    assert perfil.is_admin is True
    assert perfil.email == "root@example.com"
    assert [r.role for r in role_service.list_roles(db, identity)] == [AppRole.ADMIN]
