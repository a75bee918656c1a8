"""
Business logic for storing a customer's badge design.

All assets of one order are uploaded, one after the other, into the folder
``magiccardprint/{referenceId}``. Only the front image and the specifications
snapshot are required; every other upload is best-effort and its failure is
logged and left out of the returned asset list.
"""

import base64
import json
import os
from datetime import datetime, timezone
from typing import Callable, List

from badge_intake.dal import AssetHost
from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import count, logger, tracer
from badge_intake.logic.email_notifier import EmailNotifier
from badge_intake.models.assets import ASSET_NAMESPACE, SpecificationsSnapshot, StepResult, UploadAsset
from badge_intake.models.input import DesignUploadRequest, UploadedFile

NO_EMAIL_TAG = 'no-email'


def order_folder(reference_id: str) -> str:
    return f"{ASSET_NAMESPACE}/{reference_id}"


def strip_extension(filename: str) -> str:
    """``jane.doe.jpg`` -> ``jane.doe``; names without an extension are kept."""
    root, _ = os.path.splitext(filename)
    return root or filename


def encode_json_data_uri(document: dict) -> str:
    encoded = base64.b64encode(json.dumps(document, indent=2).encode('utf-8')).decode('ascii')
    return f"data:application/json;base64,{encoded}"


class DesignUploadService:
    """Uploads a design and its attachments, then notifies the print shop."""

    def __init__(
        self,
        asset_host: AssetHost,
        notifier: EmailNotifier,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize design upload service.

        Args:
            asset_host: client for the media asset host
            notifier: sends the order report once assets are stored
            clock: time source for the snapshot timestamp
        """
        self.asset_host = asset_host
        self.notifier = notifier
        self.clock = clock

    def _try_upload(
        self,
        file: str,
        folder: str,
        public_id: str,
        resource_type: str,
        tags: List[str],
    ) -> StepResult:
        try:
            url = self.asset_host.upload(
                file,
                folder=folder,
                public_id=public_id,
                resource_type=resource_type,
                tags=tags,
            )
        except ProviderError as e:
            logger.warning("Optional upload failed", extra={
                "folder": folder,
                "public_id": public_id,
                "error": e.message,
            })
            count("OptionalUploadFailed")
            return StepResult.failure(e.message)
        except Exception as e:
            logger.exception("Unexpected optional upload failure", extra={
                "folder": folder,
                "public_id": public_id,
            })
            count("OptionalUploadFailed")
            return StepResult.failure(str(e))
        return StepResult.success(url)

    def _upload_file(self, file: UploadedFile, folder: str, tags: List[str]) -> StepResult:
        if not file.name or not file.data:
            logger.warning("Skipping incomplete file entry", extra={
                "folder": folder,
                "file_name": file.name,
            })
            count("OptionalUploadFailed")
            return StepResult.failure("File entry needs a name and data")

        return self._try_upload(
            file.data,
            folder=folder,
            public_id=strip_extension(file.name),
            resource_type='image',
            tags=tags,
        )

    def _upload_collection(
        self,
        files: List[UploadedFile],
        folder: str,
        asset_type: str,
        tags: List[str],
    ) -> List[UploadAsset]:
        """Upload each file independently; failed or incomplete files are left out of the result."""
        uploaded: List[UploadAsset] = []
        for file in files:
            result = self._upload_file(file, folder=folder, tags=tags)
            if result.ok:
                uploaded.append(UploadAsset(type=asset_type, name=file.name, url=result.value))
        return uploaded

    @tracer.capture_method
    def upload_design(self, request: DesignUploadRequest) -> List[UploadAsset]:
        """
        Store all assets of a design order.

        Args:
            request: design upload with ``front_image`` and ``reference_id`` set

        Returns:
            Uploaded assets in upload order

        Raises:
            ProviderError: If the front image or the specifications snapshot cannot be stored
        """
        reference_id = request.reference_id
        folder = order_folder(reference_id)
        email_tag = request.customer_email or NO_EMAIL_TAG
        uploaded: List[UploadAsset] = []

        tracer.put_annotation("reference_id", reference_id)

        front_url = self.asset_host.upload(
            request.front_image,
            folder=folder,
            public_id='front',
            resource_type='image',
            tags=[reference_id, email_tag, 'bulk-order' if request.is_bulk_order else 'single-order'],
        )
        uploaded.append(UploadAsset(side='front', url=front_url))

        if request.back_image:
            back_url = self.asset_host.upload(
                request.back_image,
                folder=folder,
                public_id='back',
                resource_type='image',
                tags=[reference_id, email_tag],
            )
            uploaded.append(UploadAsset(side='back', url=back_url))

        if request.is_bulk_order and request.excel_file:
            result = self._try_upload(
                request.excel_file,
                folder=folder,
                public_id=f"bulk-data_{request.excel_file_name or 'data'}",
                resource_type='raw',
                tags=[reference_id, 'excel', 'bulk-order'],
            )
            if result.ok:
                uploaded.append(UploadAsset(type='excel', url=result.value))

        if request.is_bulk_order and request.bulk_photos:
            uploaded += self._upload_collection(
                request.bulk_photos,
                folder=f"{folder}/photos",
                asset_type='photo',
                tags=[reference_id, 'bulk-photo'],
            )

        if request.has_artwork and request.artwork_files:
            uploaded += self._upload_collection(
                request.artwork_files,
                folder=f"{folder}/artwork",
                asset_type='artwork',
                tags=[reference_id, 'artwork'],
            )

        self.upload_specifications(request, uploaded)

        logger.info("Design assets stored", extra={
            "reference_id": reference_id,
            "asset_count": len(uploaded),
        })
        count("DesignUploaded")

        notification = self.notifier.notify(request, uploaded)
        if not notification.ok:
            logger.warning("Order notification not sent", extra={
                "reference_id": reference_id,
                "error": notification.error,
            })

        return uploaded

    @tracer.capture_method
    def upload_specifications(self, request: DesignUploadRequest, uploaded: List[UploadAsset]) -> str:
        """Store the order summary as a raw JSON asset next to the design."""
        snapshot = SpecificationsSnapshot(
            reference_id=request.reference_id,
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            specifications=request.specifications,
            is_bulk_order=bool(request.is_bulk_order),
            bulk_record_count=request.bulk_record_count,
            excel_file_name=request.excel_file_name,
            bulk_photos_count=request.bulk_photos_count,
            has_artwork=bool(request.has_artwork),
            artwork_files_count=request.artwork_files_count,
            uploaded_at=self.clock(),
            uploaded_files=list(uploaded),
        )

        return self.asset_host.upload(
            encode_json_data_uri(snapshot.model_dump(mode='json', by_alias=True)),
            folder=order_folder(request.reference_id),
            public_id='specifications',
            resource_type='raw',
            tags=[request.reference_id, request.customer_email or NO_EMAIL_TAG],
        )
