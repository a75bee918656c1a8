"""
Resend implementation of the mail sender.
"""

from typing import Any, Dict, List, Optional

import resend
from resend.exceptions import ResendError

from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import tracer

PROVIDER = 'resend'


class ResendMailSender:
    """Sends plain-text emails through the Resend SDK."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    @tracer.capture_method
    def send(self, sender: str, to: List[str], subject: str, text: str) -> Optional[str]:
        payload: Dict[str, Any] = {
            'from': sender,
            'to': to,
            'subject': subject,
            'text': text,
        }

        # The SDK only reads its key from module state
        previous_api_key = getattr(resend, 'api_key', None)
        resend.api_key = self.api_key
        try:
            response = resend.Emails.send(payload)
        except ResendError as e:
            raise ProviderError(message=f"Failed to send email via Resend: {e}", provider=PROVIDER) from e
        finally:
            resend.api_key = previous_api_key

        if not isinstance(response, dict) or not response.get('id'):
            raise ProviderError(message=f"Failed to send email via Resend: {response}", provider=PROVIDER)

        return response['id']
