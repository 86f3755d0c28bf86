from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.jobs.session_reconciliation_job import SessionReconciliationJob
from src.domain.entities import SubjectType

NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_job(mock_uow, **kwargs):
    return SessionReconciliationJob(lambda: mock_uow, clock=lambda: NOW, **kwargs)


@pytest.mark.asyncio
async def test_marks_only_employees_without_live_sessions(mock_uow):
    gone, still_here = uuid4(), uuid4()
    mock_uow.sessions.find_expired_active_subject_ids.return_value = [gone, still_here]
    mock_uow.sessions.find_subject_ids_with_active_sessions.return_value = {still_here}
    mock_uow.presence.mark_offline.return_value = 1

    report = await make_job(mock_uow, delete_old_revoked=False).run()

    mock_uow.sessions.find_expired_active_subject_ids.assert_awaited_once_with(
        SubjectType.employee, NOW
    )
    mock_uow.presence.mark_offline.assert_awaited_once_with([gone], NOW)
    assert report.expired_subjects == 2
    assert report.still_active_subjects == 1
    assert report.marked_offline == 1
    assert report.ok


@pytest.mark.asyncio
async def test_no_expired_sessions_is_noop(mock_uow):
    report = await make_job(mock_uow, delete_old_revoked=False).run()

    mock_uow.sessions.find_subject_ids_with_active_sessions.assert_not_called()
    mock_uow.presence.mark_offline.assert_not_called()
    mock_uow.commit.assert_not_called()
    assert report.marked_offline == 0


@pytest.mark.asyncio
async def test_all_expired_still_active_elsewhere(mock_uow):
    subject = uuid4()
    mock_uow.sessions.find_expired_active_subject_ids.return_value = [subject]
    mock_uow.sessions.find_subject_ids_with_active_sessions.return_value = {subject}

    report = await make_job(mock_uow, delete_old_revoked=False).run()

    mock_uow.presence.mark_offline.assert_not_called()
    assert report.still_active_subjects == 1


@pytest.mark.asyncio
async def test_deletes_revoked_sessions_past_retention(mock_uow):
    mock_uow.sessions.delete_revoked_before.return_value = 5

    report = await make_job(mock_uow, revoked_retention=timedelta(days=30)).run()

    mock_uow.sessions.delete_revoked_before.assert_awaited_once_with(NOW - timedelta(days=30))
    assert report.deleted_sessions == 5


@pytest.mark.asyncio
async def test_cleanup_disabled(mock_uow):
    await make_job(mock_uow, delete_old_revoked=False).run()

    mock_uow.sessions.delete_revoked_before.assert_not_called()


@pytest.mark.asyncio
async def test_failing_step_is_reported_not_raised(mock_uow):
    mock_uow.sessions.find_expired_active_subject_ids.side_effect = RuntimeError("db down")
    mock_uow.sessions.delete_revoked_before.return_value = 2

    report = await make_job(mock_uow).run()

    assert not report.ok
    assert report.failed_steps == ["update_offline_status"]
    # The cleanup step still runs
    assert report.deleted_sessions == 2
