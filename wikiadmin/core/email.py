import logging

import resend

from wikiadmin.core.constants import JinjaCompiledEmailTemplatesEnv
from wikiadmin.core.settings import get_settings

logger = logging.getLogger(__name__)


def _render_template(template_name: str, **context: str) -> str:
    """Render a pre-compiled email template.

    Templates are pre-compiled with CSS inlined and HTML minified.
    Run `python scripts/compile_emails.py` after modifying source templates.
    """
    template = JinjaCompiledEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.info("RESEND_API_KEY is not set, invitation emails are disabled")
        return
    resend.api_key = settings.resend_api_key


def send_invitation_email(*, to_email: str, password: str, site_url: str) -> None:
    """Send the temporary credentials of an invited user via Resend.

    Args:
        to_email: Invited address, also the login id
        password: Temporary password generated for the account
        site_url: Wiki URL the user should log in at
    """
    settings = get_settings()

    html_content = _render_template(
        "invitation.html",
        app_title=settings.app_title,
        email=to_email,
        password=password,
        site_url=site_url,
    )

    resend.Emails.send(
        {
            "from": f"noreply@{settings.app_domain}",
            "to": to_email,
            "subject": f"Invitation to {settings.app_title}",
            "html": html_content,
        }
    )
