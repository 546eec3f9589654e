"""
Tests for the site directory
"""

import uuid

import pytest

from conftest import make_site, make_user
from visitswap.constants import SiteStatus
from visitswap.services.sites import SiteDirectoryService
from visitswap.utils.exceptions import NotFoundError


def test_create_site(store, owner):
    site = SiteDirectoryService(store).create_site(owner.id, "My shop", "https://shop.example.com")

    assert site.user_id == owner.id
    assert site.title == "My shop"
    assert site.url == "https://shop.example.com"
    assert site.status == SiteStatus.ACTIVE
    assert site.visits_received == 0


def test_create_site_unknown_owner(store):
    with pytest.raises(NotFoundError):
        SiteDirectoryService(store).create_site(uuid.uuid4(), "Ghost", "https://ghost.example.com")


def test_list_own_sites_includes_inactive(store, owner, visitor):
    service = SiteDirectoryService(store)
    active = make_site(store, owner, title="Active")
    paused = make_site(store, owner, title="Paused", status=SiteStatus.INACTIVE)
    make_site(store, visitor, title="Not mine")

    ids = {s.id for s in service.list_own_sites(owner.id)}

    assert ids == {active.id, paused.id}


def test_browse_excludes_callers_sites(store, owner, visitor):
    service = SiteDirectoryService(store)
    mine = make_site(store, visitor, title="Mine, active")
    theirs = make_site(store, owner, title="Theirs, active")

    ids = {s.id for s in service.browse_sites(visitor.id)}

    assert theirs.id in ids
    assert mine.id not in ids


def test_browse_only_lists_active_sites(store, owner, visitor):
    service = SiteDirectoryService(store)
    active = make_site(store, owner, title="Active")
    make_site(store, owner, title="Paused", status=SiteStatus.INACTIVE)

    assert [s.id for s in service.browse_sites(visitor.id)] == [active.id]


def test_browse_for_user_without_sites_lists_everyone_active(store, owner):
    third = make_user(store, "third@example.com")
    make_site(store, owner, title="A")
    make_site(store, third, title="B")
    newcomer = make_user(store, "new@example.com")

    titles = sorted(s.title for s in SiteDirectoryService(store).browse_sites(newcomer.id))

    assert titles == ["A", "B"]
