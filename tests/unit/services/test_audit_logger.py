import logging
from uuid import uuid4

from src.app.services.audit_logger import AUDIT_LOGGER_NAME, AuthAuditLogger


def test_successful_auth_event_logged_at_info(caplog):
    audit = AuthAuditLogger()
    subject_id = uuid4()

    with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER_NAME):
        audit.auth_event("LOGIN", True, subject_id=subject_id, ip="10.0.0.1", role="hr")

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.audit["action"] == "LOGIN"
    assert record.audit["outcome"] == "success"
    assert record.audit["subject_id"] == str(subject_id)
    assert "ip=10.0.0.1" in record.getMessage()


def test_failed_auth_event_logged_at_warning_with_reason(caplog):
    audit = AuthAuditLogger()

    with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER_NAME):
        audit.auth_event("LOGIN", False, login_id="x@hrms.test", reason="invalid_password")

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.audit["outcome"] == "failure"
    assert record.audit["reason"] == "invalid_password"


def test_security_event_severity_levels(caplog):
    audit = AuthAuditLogger()

    with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER_NAME):
        audit.security_event("A", "low")
        audit.security_event("B", "medium")
        audit.security_event("C", "high", {"session": "abcd1234"})

    levels = [record.levelno for record in caplog.records[-3:]]
    assert levels == [logging.INFO, logging.WARNING, logging.ERROR]
    assert caplog.records[-1].audit["session"] == "abcd1234"
