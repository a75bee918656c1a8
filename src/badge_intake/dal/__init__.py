"""
Integration layer for the order-intake service.

This module defines the interfaces of the three external providers the
handlers talk to, plus factory functions building the production clients.
Handlers only depend on the protocols so tests can substitute fakes.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from badge_intake.models.catalog import CategoryFolder


@runtime_checkable
class PaymentsGateway(Protocol):
    """Protocol for the hosted checkout provider."""

    def first_location_id(self) -> Optional[str]:
        """Return the id of the merchant's first registered location."""
        ...

    def create_payment_link(
        self,
        idempotency_key: str,
        item_name: str,
        amount_cents: int,
        currency: str,
        location_id: str,
        redirect_url: str,
        payment_note: str,
        buyer_email: Optional[str] = None,
    ) -> Dict[str, Optional[str]]:
        """Create a payment link; returns ``{"url": ..., "order_id": ...}``."""
        ...


@runtime_checkable
class AssetHost(Protocol):
    """Protocol for the media asset host."""

    def list_subfolders(self, root: str) -> List[CategoryFolder]:
        """List the direct sub-folders of ``root``."""
        ...

    def list_resources(self, prefix: str, max_results: int = 100) -> List[Dict[str, Any]]:
        """List uploaded resources whose public id starts with ``prefix``."""
        ...

    def upload(
        self,
        file: str,
        folder: str,
        public_id: str,
        resource_type: str,
        tags: List[str],
    ) -> str:
        """Upload ``file`` and return its secure URL."""
        ...


@runtime_checkable
class MailSender(Protocol):
    """Protocol for the transactional email provider."""

    def send(self, sender: str, to: List[str], subject: str, text: str) -> Optional[str]:
        """Send a plain-text email, returning the provider message id."""
        ...


def get_payments_gateway(access_token: str, production: bool) -> PaymentsGateway:
    # Import here to keep SDK import cost out of unrelated functions
    from badge_intake.dal.square_gateway import SquarePaymentsGateway

    return SquarePaymentsGateway(access_token=access_token, production=production)


def get_asset_host(cloud_name: str, api_key: str, api_secret: str) -> AssetHost:
    from badge_intake.dal.cloudinary_host import CloudinaryAssetHost

    return CloudinaryAssetHost(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret)


def get_mail_sender(api_key: str) -> MailSender:
    from badge_intake.dal.resend_mailer import ResendMailSender

    return ResendMailSender(api_key=api_key)


__all__ = [
    'PaymentsGateway',
    'AssetHost',
    'MailSender',
    'get_payments_gateway',
    'get_asset_host',
    'get_mail_sender',
]
