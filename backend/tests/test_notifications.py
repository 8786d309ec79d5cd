from unittest.mock import MagicMock

import pytest

from bloodbank.database import Settings
from bloodbank.utils import notifications
from bloodbank.utils.notifications import EmailNotification, NotificationService

MESSAGE = EmailNotification(to="donor@example.com", subject="Donation Approved", body="Thanks!")


def _service(**overrides):
    return NotificationService(Settings(_env_file=None, **overrides))


async def test_without_smtp_host_delivery_is_mocked():
    assert await _service(smtp_host=None).send_email(MESSAGE) is True


async def test_sends_through_smtp(monkeypatch):
    smtp = MagicMock()
    monkeypatch.setattr(notifications.smtplib, "SMTP", smtp)
    service = _service(smtp_host="smtp.example.com", smtp_user="bank", smtp_password="pw")

    assert await service.send_email(MESSAGE) is True

    smtp.assert_called_once_with("smtp.example.com", 587, timeout=10)
    server = smtp.return_value.__enter__.return_value
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("bank", "pw")
    sent = server.send_message.call_args.args[0]
    assert sent["To"] == "donor@example.com"
    assert sent["Subject"] == "Donation Approved"


async def test_delivery_failure_is_swallowed(monkeypatch):
    monkeypatch.setattr(notifications.smtplib, "SMTP", MagicMock(side_effect=OSError("refused")))
    service = _service(smtp_host="smtp.example.com")

    assert await service.send_email(MESSAGE) is False


async def test_dispatch_returns_immediately_and_drains(monkeypatch):
    service = _service(smtp_host=None)
    delivered = []

    async def fake_send(message):
        delivered.append(message)
        return True

    monkeypatch.setattr(service, "send_email", fake_send)

    assert service.dispatch(MESSAGE) is None
    assert len(service.pending) == 1
    await service.drain()

    assert delivered == [MESSAGE]
    assert not service.pending


@pytest.mark.parametrize("use_tls", [True, False])
async def test_starttls_follows_settings(monkeypatch, use_tls):
    smtp = MagicMock()
    monkeypatch.setattr(notifications.smtplib, "SMTP", smtp)

    await _service(smtp_host="smtp.example.com", smtp_use_tls=use_tls).send_email(MESSAGE)

    server = smtp.return_value.__enter__.return_value
    assert server.starttls.called is use_tls
    server.login.assert_not_called()
