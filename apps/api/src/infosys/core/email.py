"""
Email Service using Resend

Handles sending emails for the student registration flow.
When no Resend API key is configured the message is logged (recipient and
subject only) instead of being sent.
"""

import asyncio
import logging
from html import escape

import resend

from infosys.core.config import settings

logger = logging.getLogger(__name__)

DEPARTMENT_NAME = "Department of Information Systems"


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent (or simulated) successfully
    """
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    resend.api_key = settings.resend_api_key

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_passcode_email(
    to_email: str,
    student_name: str,
    reg_number: str,
    passcode: str,
) -> bool:
    """Send the one-time login passcode to a newly approved student."""
    # Escape user inputs to prevent XSS
    safe_student_name = escape(student_name)
    safe_reg_number = escape(reg_number)
    safe_email = escape(to_email)

    login_url = f"{settings.frontend_url}/student/login"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .header {{ background: #2563eb; color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }}
            .content {{ background: #f8f9fa; padding: 30px; border-radius: 0 0 10px 10px; }}
            .passcode {{ background: #2563eb; color: white; padding: 15px; text-align: center; font-size: 24px; font-weight: bold; border-radius: 5px; margin: 15px 0; }}
            .warning {{ background: #fff3cd; border: 1px solid #ffeaa7; color: #856404; padding: 15px; border-radius: 5px; margin: 15px 0; }}
            .footer {{ text-align: center; padding: 20px; font-size: 12px; color: #666; }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>InfoSys UniUyo</h1>
                <p>{DEPARTMENT_NAME}</p>
            </div>

            <div class="content">
                <p>Dear <strong>{safe_student_name}</strong>,</p>

                <p>Your registration has been approved. Your account is now active.</p>

                <ul>
                    <li><strong>Registration Number:</strong> {safe_reg_number}</li>
                    <li><strong>Email:</strong> {safe_email}</li>
                </ul>

                <p>Your login passcode is:</p>
                <div class="passcode">{passcode}</div>

                <div class="warning">
                    <strong>Keep this passcode confidential.</strong>
                    You can change it from your dashboard after logging in.
                </div>

                <p>Log in at <a href="{login_url}">{login_url}</a> with your registration number and passcode.</p>
            </div>

            <div class="footer">
                <p>{DEPARTMENT_NAME} | Faculty of Computing | University of Uyo</p>
                <p><em>This is an automated message. Please do not reply to this email.</em></p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"Account Activation - {DEPARTMENT_NAME}",
        html_content=html_content,
    )


async def send_admin_registration_notice(
    student_name: str,
    reg_number: str,
    student_email: str,
) -> bool:
    """Tell the department admin a new registration is awaiting approval."""
    safe_student_name = escape(student_name)
    safe_reg_number = escape(reg_number)
    safe_email = escape(student_email)

    dashboard_url = f"{settings.frontend_url}/admin/dashboard"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <body>
        <h2>New Student Registration</h2>
        <p>A new student has registered and is awaiting approval:</p>
        <ul>
            <li><strong>Name:</strong> {safe_student_name}</li>
            <li><strong>Registration Number:</strong> {safe_reg_number}</li>
            <li><strong>Email:</strong> {safe_email}</li>
        </ul>
        <p>Review pending registrations in the <a href="{dashboard_url}">admin dashboard</a>.</p>
    </body>
    </html>
    """

    return await send_email(
        to_email=settings.admin_notification_email,
        subject="New Student Registration - Pending Approval",
        html_content=html_content,
    )
