"""
Tests — Publish gate
====================
Public visibility is approved + online + not withdrawn, both in memory
and as a SQL clause.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy import select

from hotel_market.models import AuditStatus, Hotel, PublishStatus
from hotel_market.services.listing import publish_gate


def listing(audit, publish, deleted=False):
    return SimpleNamespace(audit_status=audit, publish_status=publish, is_deleted=deleted)


class TestIsPubliclyVisible:
    def test_approved_online_is_visible(self):
        assert publish_gate.is_publicly_visible(listing(AuditStatus.APPROVED, PublishStatus.ONLINE))

    @pytest.mark.parametrize(
        "audit,publish,deleted",
        [
            (AuditStatus.APPROVED, PublishStatus.OFFLINE, False),
            (AuditStatus.APPROVED, PublishStatus.ONLINE, True),
            (AuditStatus.PENDING, PublishStatus.OFFLINE, False),
            (AuditStatus.DRAFT, PublishStatus.OFFLINE, False),
            (AuditStatus.REJECTED, PublishStatus.OFFLINE, False),
        ],
    )
    def test_everything_else_is_hidden(self, audit, publish, deleted):
        assert not publish_gate.is_publicly_visible(listing(audit, publish, deleted))


class TestCanTogglePublish:
    def test_only_approved(self):
        assert publish_gate.can_toggle_publish(listing(AuditStatus.APPROVED, PublishStatus.OFFLINE))
        for status in (AuditStatus.DRAFT, AuditStatus.PENDING, AuditStatus.REJECTED):
            assert not publish_gate.can_toggle_publish(listing(status, PublishStatus.OFFLINE))


class TestVisibleClause:
    def test_matches_in_memory_rule(self, make_listing, session_factory):
        visible = make_listing()
        make_listing(publish_status=PublishStatus.OFFLINE)
        make_listing(audit_status=AuditStatus.PENDING)
        make_listing(is_deleted=True)

        session = session_factory()
        try:
            rows = session.execute(
                select(Hotel).where(publish_gate.visible_clause(Hotel))
            ).scalars().all()
            assert [h.id for h in rows] == [visible]
            assert all(publish_gate.is_publicly_visible(h) for h in rows)
        finally:
            session.close()
