"""
Session Reconciliation Job

Keeps employee presence consistent with session expiry and prunes old
revoked sessions. Runs on an IntervalScheduler.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SubjectType

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    started_at: datetime
    expired_subjects: int = 0
    still_active_subjects: int = 0
    marked_offline: int = 0
    deleted_sessions: int = 0
    duration_ms: float = 0.0
    failed_steps: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_steps


class SessionReconciliationJob:
    """
    Marks employees OFFLINE once all their sessions have expired.

    Business Rules:
    - Only employee sessions with expires_at < now and revoked_at NULL count
    - An employee with any other live session stays ONLINE
    - Rows already OFFLINE are not rewritten
    - Revoked sessions older than the retention window are deleted when
      delete_old_revoked is on
    - A failing step is logged and reported; it never raises out of run()
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        delete_old_revoked: bool = True,
        revoked_retention: timedelta = timedelta(days=90),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow_factory = uow_factory
        self.delete_old_revoked = delete_old_revoked
        self.revoked_retention = revoked_retention
        self.clock = clock

    async def run(self) -> ReconciliationReport:
        now = self.clock()
        report = ReconciliationReport(started_at=now)
        started = time.perf_counter()
        logger.info("Session reconciliation started")

        try:
            await self._update_offline_status(now, report)
        except Exception:
            logger.exception("Session reconciliation: offline status update failed")
            report.failed_steps.append("update_offline_status")

        if self.delete_old_revoked:
            try:
                await self._delete_old_revoked_sessions(now, report)
            except Exception:
                logger.exception("Session reconciliation: revoked session cleanup failed")
                report.failed_steps.append("delete_old_revoked_sessions")

        report.duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Session reconciliation finished in {report.duration_ms:.1f}ms: "
            f"expired_subjects={report.expired_subjects} "
            f"still_active={report.still_active_subjects} "
            f"marked_offline={report.marked_offline} "
            f"deleted_sessions={report.deleted_sessions} "
            f"failed_steps={report.failed_steps or None}"
        )
        return report

    async def _update_offline_status(self, now: datetime, report: ReconciliationReport) -> None:
        step_started = time.perf_counter()
        uow = self.uow_factory()
        async with uow:
            # Step 1-2: subjects with an expired, never revoked session
            expired_ids = await uow.sessions.find_expired_active_subject_ids(
                SubjectType.employee, now
            )
            report.expired_subjects = len(expired_ids)
            if not expired_ids:
                logger.info("No expired employee sessions found")
                return

            # Step 3: keep employees that are still logged in elsewhere
            still_active = await uow.sessions.find_subject_ids_with_active_sessions(
                SubjectType.employee, expired_ids, now
            )
            report.still_active_subjects = len(still_active)
            to_mark_offline = [sid for sid in expired_ids if sid not in still_active]
            if not to_mark_offline:
                logger.info(
                    f"All {len(expired_ids)} employees with expired sessions "
                    f"still have an active session"
                )
                return

            # Step 4
            report.marked_offline = await uow.presence.mark_offline(to_mark_offline, now)
            await uow.commit()

        logger.info(
            f"Marked {report.marked_offline} of {len(to_mark_offline)} employees OFFLINE "
            f"in {(time.perf_counter() - step_started) * 1000:.1f}ms"
        )

    async def _delete_old_revoked_sessions(
        self, now: datetime, report: ReconciliationReport
    ) -> None:
        step_started = time.perf_counter()
        cutoff = now - self.revoked_retention
        uow = self.uow_factory()
        async with uow:
            report.deleted_sessions = await uow.sessions.delete_revoked_before(cutoff)
            await uow.commit()

        logger.info(
            f"Deleted {report.deleted_sessions} sessions revoked before {cutoff.isoformat()} "
            f"in {(time.perf_counter() - step_started) * 1000:.1f}ms"
        )

