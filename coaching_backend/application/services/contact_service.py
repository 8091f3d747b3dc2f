"""
Contact service.

Relays the public contact form to the send-contact-form function. The
call is the operation itself, so its failure is reported to the caller.

Dependencies: coaching_backend.boundary.functions
System role: Contact form use case
"""

import logging

from coaching_backend.boundary.functions import CONTACT_FORM_FUNCTION, NotificationClient
from coaching_backend.core.exceptions import NotificationError
from coaching_backend.models.common import Notice, success_notice
from coaching_backend.models.contact import ContactRequest
from coaching_backend.observability.log_utils import mask_email

logger = logging.getLogger(__name__)


class ContactService:
    """Contact form orchestrator."""

    def __init__(self, notifier: NotificationClient) -> None:
        self.notifier = notifier

    async def submit_contact(self, request: ContactRequest) -> Notice:
        """
        Send a contact message.

        Raises:
            NotificationError: The function call failed
        """
        try:
            await self.notifier.invoke(CONTACT_FORM_FUNCTION, request.model_dump(mode="json"))
        except NotificationError as e:
            logger.error(
                f"{__name__}:submit_contact - Contact form delivery failed",
                extra={"email": mask_email(request.email), "error": e.message},
            )
            raise
        logger.info(
            f"{__name__}:submit_contact - Contact message sent",
            extra={"email": mask_email(request.email)},
        )
        return success_notice(
            "Message sent",
            "Thank you for your message. We will get back to you soon.",
        )
