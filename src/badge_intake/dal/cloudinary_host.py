"""
Cloudinary implementation of the asset host.

Credentials are passed with every call instead of being set once through
the global ``cloudinary.config``.
"""

from typing import Any, Dict, List

import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.handlers.utils.observability import logger, tracer
from badge_intake.models.catalog import CategoryFolder

PROVIDER = 'cloudinary'

# The SDK reads strings it cannot parse as a URL or data URI as local paths
SDK_ERRORS = (CloudinaryError, OSError, ValueError)


class CloudinaryAssetHost:
    """Cloudinary Admin and Upload API client."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        self.cloud_name = cloud_name
        self._credentials = {
            'cloud_name': cloud_name,
            'api_key': api_key,
            'api_secret': api_secret,
        }
        logger.debug('Cloudinary host initialized', extra={'cloud_name': cloud_name})

    @tracer.capture_method
    def list_subfolders(self, root: str) -> List[CategoryFolder]:
        try:
            result = cloudinary.api.subfolders(root, **self._credentials)
        except SDK_ERRORS as e:
            raise ProviderError(message=str(e), provider=PROVIDER) from e

        return [CategoryFolder(name=folder['name'], path=folder['path']) for folder in result.get('folders') or []]

    @tracer.capture_method
    def list_resources(self, prefix: str, max_results: int = 100) -> List[Dict[str, Any]]:
        try:
            result = cloudinary.api.resources(
                type='upload',
                prefix=prefix,
                max_results=max_results,
                **self._credentials,
            )
        except SDK_ERRORS as e:
            raise ProviderError(message=str(e), provider=PROVIDER) from e

        return list(result.get('resources') or [])

    @tracer.capture_method
    def upload(
        self,
        file: str,
        folder: str,
        public_id: str,
        resource_type: str,
        tags: List[str],
    ) -> str:
        """
        Upload a file to Cloudinary.

        Args:
            file: data URI, remote URL or local path accepted by the Upload API
            folder: destination folder
            public_id: name of the asset inside ``folder``
            resource_type: ``image`` or ``raw``
            tags: tags attached for later lookup

        Returns:
            Secure URL of the stored asset

        Raises:
            ProviderError: If the upload fails
        """
        try:
            result = cloudinary.uploader.upload(
                file,
                folder=folder,
                public_id=public_id,
                resource_type=resource_type,
                tags=tags,
                **self._credentials,
            )
        except SDK_ERRORS as e:
            raise ProviderError(message=str(e), provider=PROVIDER) from e

        logger.debug('Asset uploaded', extra={'folder': folder, 'public_id': public_id})
        return result['secure_url']
