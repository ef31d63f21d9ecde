from __future__ import annotations

import smtplib
from email.mime.text import MIMEText


def send_email_message(
    *,
    smtp_server: str,
    smtp_port: int,
    from_email: str,
    from_password: str,
    to_email: str,
    subject: str,
    body: str,
    timeout_seconds: float = 20.0,
) -> None:
    message = MIMEText(body, "plain", "utf-8")
    message["From"] = from_email
    message["To"] = to_email
    message["Subject"] = subject

    with smtplib.SMTP(smtp_server, smtp_port, timeout=timeout_seconds) as server:
        server.starttls()
        server.login(from_email, from_password)
        server.send_message(message)
