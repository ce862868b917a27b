from accounthub.notify import mailer
from accounthub.notify.mailer import SmtpNotifier, build_notifier
from accounthub.shared.config import Settings


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.sent.append(msg)


def test_smtp_notifier_sends_plain_text(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    n = SmtpNotifier("smtp.example.com", 2525, sender="noreply@example.com", username="u", password="p")
    n.send("ada@example.com", "Reset your password", "link")

    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.example.com", 2525)
    assert smtp.calls == ["starttls", ("login", "u", "p")]
    msg = smtp.sent[0]
    assert msg["To"] == "ada@example.com"
    assert msg["From"] == "noreply@example.com"
    assert msg.get_content().strip() == "link"


def test_smtp_notifier_without_tls_or_login(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    SmtpNotifier("localhost", 25, starttls=False).send("a@example.com", "s", "b")
    assert FakeSMTP.instances[0].calls == []


def test_build_notifier_needs_host():
    assert build_notifier(Settings(SMTP_HOST=None)) is None
    n = build_notifier(Settings(SMTP_HOST="smtp.example.com", SMTP_PORT=2525))
    assert isinstance(n, SmtpNotifier) and n.port == 2525
