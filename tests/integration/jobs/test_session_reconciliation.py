from datetime import timedelta

import pytest

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.jobs.session_reconciliation_job import SessionReconciliationJob
from src.app.services.token_issuer import hash_refresh_token
from src.domain.base import utcnow
from src.domain.entities import PresenceStatus, Session, SubjectType


async def add_session(uow, subject_id, secret, expires_at, revoked_at=None):
    await uow.sessions.create(
        Session(
            subject_id=subject_id,
            subject_type=SubjectType.employee,
            token_hash=hash_refresh_token(secret),
            expires_at=expires_at,
            revoked_at=revoked_at,
        )
    )


@pytest.mark.asyncio
async def test_employee_with_another_live_session_stays_online(db_session, seed, uow_factory):
    now = utcnow()
    single = await seed.employee("single@hrms.test")
    multi = await seed.employee("multi@hrms.test")

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await add_session(uow, single.id, "s1", now - timedelta(minutes=5))
        await add_session(uow, multi.id, "m1", now - timedelta(minutes=5))
        await add_session(uow, multi.id, "m2", now + timedelta(days=2))
        await uow.presence.upsert(single.id, PresenceStatus.online)
        await uow.presence.upsert(multi.id, PresenceStatus.online)
        await uow.commit()

    report = await SessionReconciliationJob(uow_factory, delete_old_revoked=False).run()

    assert report.ok
    assert report.expired_subjects == 2
    assert report.still_active_subjects == 1
    assert report.marked_offline == 1

    async with uow_factory() as uow:
        assert (await uow.presence.get_by_employee_id(single.id)).status == PresenceStatus.offline
        assert (await uow.presence.get_by_employee_id(multi.id)).status == PresenceStatus.online


@pytest.mark.asyncio
async def test_second_run_changes_nothing(db_session, seed, uow_factory):
    employee = await seed.employee("alice@hrms.test")

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await add_session(uow, employee.id, "x", utcnow() - timedelta(minutes=1))
        await uow.presence.upsert(employee.id, PresenceStatus.online)
        await uow.commit()

    job = SessionReconciliationJob(uow_factory, delete_old_revoked=False)
    first = await job.run()
    second = await job.run()

    assert first.marked_offline == 1
    assert second.marked_offline == 0


@pytest.mark.asyncio
async def test_old_revoked_sessions_are_pruned(db_session, seed, uow_factory):
    employee = await seed.employee("alice@hrms.test")
    now = utcnow()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await add_session(uow, employee.id, "old", now, revoked_at=now - timedelta(days=100))
        await add_session(uow, employee.id, "new", now, revoked_at=now - timedelta(days=1))
        await uow.commit()

    report = await SessionReconciliationJob(
        uow_factory, revoked_retention=timedelta(days=90)
    ).run()

    assert report.deleted_sessions == 1
    async with uow_factory() as uow:
        assert await uow.sessions.find_by_token_hash(hash_refresh_token("old")) is None
        assert await uow.sessions.find_by_token_hash(hash_refresh_token("new")) is not None
