# eventboard/mailer.py
import json
import sib_api_v3_sdk
from sib_api_v3_sdk.rest import ApiException
from eventboard.logging_config import setup_logging

logger = setup_logging()


class MailerError(Exception):
    pass


def load_email_config(json_path):
    try:
        with open(json_path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        logger.error("Email configuration file not found.")
        return None
    except json.JSONDecodeError:
        logger.error("Error decoding the email configuration file.")
        return None


class BrevoMailer:
    """Sends transactional mail through the Brevo (Sendinblue) API."""

    def __init__(self, api_key, sender_email, sender_name='Eventboard'):
        self.sender = {"name": sender_name, "email": sender_email}
        configuration = sib_api_v3_sdk.Configuration()
        configuration.api_key['api-key'] = api_key
        self.api_instance = sib_api_v3_sdk.TransactionalEmailsApi(sib_api_v3_sdk.ApiClient(configuration))

    @classmethod
    def from_config_file(cls, json_path):
        email_config = load_email_config(json_path)
        if not email_config or not email_config.get('api_key'):
            return None
        return cls(
            api_key=email_config['api_key'],
            sender_email=email_config.get('sender_email', 'no-reply@eventboard.local'),
            sender_name=email_config.get('sender_name', 'Eventboard'),
        )

    def send_password_reset(self, user, reset_link):
        name = f"{user.first_name} {user.last_name}"
        send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
            to=[{"email": user.email, "name": name}],
            sender=self.sender,
            subject="Reset your password",
            html_content=(
                f"Dear {user.first_name},<br>"
                f"A password reset was requested for your account. "
                f"Use the link below within the next hour to choose a new password:<br>"
                f"<a href=\"{reset_link}\">{reset_link}</a><br><br>"
                f"If you did not request this, you can ignore this email.<br><br>"
                f"Warm Regards,<br>The {self.sender['name']} Team"
            ),
        )
        try:
            api_response = self.api_instance.send_transac_email(send_smtp_email)
            logger.info(f"Password reset email sent successfully: {api_response}")
        except ApiException as e:
            logger.error(f"Exception when calling TransactionalEmailsApi->send_transac_email: {e}")
            raise MailerError(str(e)) from e


class UnconfiguredMailer:
    """Stand-in used when no email configuration is available; every send fails."""

    def send_password_reset(self, user, reset_link):
        logger.error("Email delivery is not configured; cannot send password reset email.")
        raise MailerError("Email delivery is not configured.")
