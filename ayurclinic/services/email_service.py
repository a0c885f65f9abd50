"""
Email Service for staff welcome messages and therapy session reminders
"""
import smtplib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from flask import current_app

logger = logging.getLogger(__name__)


def _send_email(to_address, subject, text, html):
    """
    Send a multipart email using the MAIL_* settings.

    Returns:
        bool: True if sent, False if email is not configured or sending failed
    """
    mail_server = current_app.config.get('MAIL_SERVER')
    mail_port = current_app.config.get('MAIL_PORT')
    mail_use_tls = current_app.config.get('MAIL_USE_TLS')
    mail_username = current_app.config.get('MAIL_USERNAME')
    mail_password = current_app.config.get('MAIL_PASSWORD')
    mail_sender = current_app.config.get('MAIL_DEFAULT_SENDER')

    if not mail_username or not mail_password:
        logger.warning("Email not configured. Skipping '%s' to %s.", subject, to_address)
        return False

    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = mail_sender
    msg['To'] = to_address
    msg.attach(MIMEText(text, 'plain'))
    msg.attach(MIMEText(html, 'html'))

    try:
        with smtplib.SMTP(mail_server, mail_port) as server:
            if mail_use_tls:
                server.starttls()
            server.login(mail_username, mail_password)
            server.sendmail(mail_sender, to_address, msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send '{subject}' to {to_address}: {e}")
        return False

    logger.info(f"Email '{subject}' sent to {to_address}")
    return True


def send_welcome_email(email, name, role, login_link):
    """
    Send welcome email to a newly created doctor or therapist

    Args:
        email: User's email address (also the login)
        name: Display name
        role: 'doctor' or 'therapist'
        login_link: Link to the login page
    """
    text = f"""
Namaste {name},

An account has been created for you at AyurVeda Wellness Center.

Login: {email}
Role: {role.title()}

Sign in here: {login_link}

Your administrator will share your initial password with you.
"""

    html = f"""
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background: #4a7c59; color: white; padding: 20px; text-align: center;">
            <h1>Welcome, {name}</h1>
        </div>
        <div style="background: #f9f9f9; padding: 30px; border: 1px solid #ddd;">
            <p>An account has been created for you at AyurVeda Wellness Center.</p>
            <p><strong>Login:</strong> {email}<br><strong>Role:</strong> {role.title()}</p>
            <p><a href="{login_link}">Sign in</a></p>
        </div>
    </div>
</body>
</html>
"""
    return _send_email(email, 'Welcome to AyurVeda Wellness Center', text, html)


def send_session_reminder_email(email, name, session):
    """
    Remind a patient about an upcoming therapy session

    Args:
        email: Patient email
        name: Patient display name
        session: TherapySession about to start
    """
    when = session.scheduled_at.strftime('%A %d %B %Y at %H:%M')
    text = f"""
Namaste {name},

This is a reminder of your upcoming therapy session:

Therapy: {session.therapy_type} (session {session.session_number} of {session.total_sessions})
When: {when}
Duration: {session.duration} minutes
Therapist: {session.therapist_name}

AyurVeda Wellness Center
"""

    html = f"""
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #4a7c59;">Upcoming therapy session</h2>
        <table>
            <tr><td><strong>Therapy</strong></td><td>{session.therapy_type} ({session.session_number}/{session.total_sessions})</td></tr>
            <tr><td><strong>When</strong></td><td>{when}</td></tr>
            <tr><td><strong>Duration</strong></td><td>{session.duration} minutes</td></tr>
            <tr><td><strong>Therapist</strong></td><td>{session.therapist_name}</td></tr>
        </table>
    </div>
</body>
</html>
"""
    return _send_email(email, f'Reminder: {session.therapy_type} session', text, html)
