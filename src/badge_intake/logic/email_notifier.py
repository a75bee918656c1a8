"""
Order notification emails.

Formats a plain-text report of an uploaded design for the print shop and
hands it to the mail provider. Without a configured provider the report is
written to the log instead.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from badge_intake.dal import MailSender
from badge_intake.handlers.utils.errors import BaseServiceError
from badge_intake.handlers.utils.observability import count, logger, tracer
from badge_intake.models.assets import ASSET_NAMESPACE, StepResult, UploadAsset
from badge_intake.models.input import DesignUploadRequest


def build_subject(reference_id: str, customer_name: Optional[str]) -> str:
    return f"New Order: {reference_id} - {customer_name}"


def build_body(
    request: DesignUploadRequest,
    uploaded: List[UploadAsset],
    sent_at: datetime,
) -> str:
    """
    Render the plain-text order report.

    The bulk and artwork sections are only included when the order has them.
    """
    specs: Dict[str, Any] = request.specifications or {}
    proof_approval = 'YES - Send proof before printing' if specs.get('proofApproval') else 'No'

    lines = [
        "NEW MAGICCARDPRINT ORDER",
        "========================",
        "",
        f"Reference ID: {request.reference_id}",
        f"Customer Name: {request.customer_name}",
        f"Customer Email: {request.customer_email}",
        f"Order Type: {specs.get('orderType') or 'Single Badge'}",
        f"Date: {sent_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        "",
        "BADGE SPECIFICATIONS",
        "--------------------",
        f"Badge Style: {specs.get('badgeStyle')}",
        f"Card Type: {specs.get('cardType')}",
        f"Orientation: {specs.get('orientation')}",
        f"Hole/Slot: {specs.get('holeSlot')}",
        f"Proof Approval: {proof_approval}",
        f"Delivery Date: {specs.get('deliveryDate')}",
        f"Additional Instructions: {specs.get('additionalInstructions')}",
    ]

    if request.is_bulk_order:
        lines += [
            "",
            "BULK ORDER DETAILS",
            "------------------",
            f"Total Badges: {'N/A' if request.excel_data is None else len(request.excel_data)}",
            f"Excel File: {request.excel_file_name or 'Uploaded'}",
            f"Photos Uploaded: {request.bulk_photos_count}",
        ]

    if request.has_artwork:
        lines += [
            "",
            "COMPLETE ARTWORK",
            "----------------",
            f"Artwork Files Uploaded: {request.artwork_files_count}",
            "Note: Customer has uploaded complete artwork design files.",
        ]

    lines += [
        "",
        "CLOUDINARY FILES",
        "----------------",
    ]
    lines += [f"{asset.manifest_label}: {asset.url}" for asset in uploaded]

    lines += [
        "",
        "------------------------",
        "View all files in Cloudinary:",
        f"Folder: {ASSET_NAMESPACE}/{request.reference_id}",
        "",
        "MagicCardPrint Badge Designer",
        "",
    ]
    return "\n".join(lines)


class EmailNotifier:
    """Sends the order report to the print shop inbox."""

    def __init__(
        self,
        mail_sender: Optional[MailSender],
        sender: str,
        recipient: str,
        clock: Callable[[], datetime] = lambda: datetime.now().astimezone(),
    ):
        """
        Initialize the notifier.

        Args:
            mail_sender: mail provider client, None to only log the report
            sender: ``From`` address
            recipient: print shop inbox
            clock: time source for the report date
        """
        self.mail_sender = mail_sender
        self.sender = sender
        self.recipient = recipient
        self.clock = clock

    @tracer.capture_method
    def notify(self, request: DesignUploadRequest, uploaded: List[UploadAsset]) -> StepResult:
        """
        Send the order report.

        Never raises; the outcome is returned for the caller to inspect.

        Returns:
            Success with the provider message id, or failure with the error text
        """
        try:
            subject = build_subject(request.reference_id, request.customer_name)
            body = build_body(request, uploaded, self.clock())

            if self.mail_sender is None:
                logger.info("Email service not configured, logging notification", extra={
                    "to": self.recipient,
                    "subject": subject,
                    "body": body,
                })
                return StepResult.success()

            message_id = self.mail_sender.send(
                sender=self.sender,
                to=[self.recipient],
                subject=subject,
                text=body,
            )
        except BaseServiceError as e:
            count("NotificationFailed")
            return StepResult.failure(e.message)
        except Exception as e:
            logger.exception("Unexpected notification failure")
            count("NotificationFailed")
            return StepResult.failure(str(e))

        logger.info("Order notification sent", extra={
            "reference_id": request.reference_id,
            "message_id": message_id,
        })
        return StepResult.success(message_id)
