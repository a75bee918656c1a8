"""
Provider client construction shared by the handlers.
"""

from badge_intake.dal import AssetHost, get_asset_host
from badge_intake.handlers.models.env_vars import AssetHostEnvVars
from badge_intake.handlers.utils.errors import ConfigurationError


def require_asset_host(env_vars: AssetHostEnvVars) -> AssetHost:
    """
    Build the Cloudinary client, failing fast when credentials are missing.

    Raises:
        ConfigurationError: If any Cloudinary credential is unset
    """
    if not env_vars.is_configured:
        raise ConfigurationError(
            message='Cloudinary credentials not configured',
            details=(
                'Please add CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, and '
                'CLOUDINARY_API_SECRET to the function environment variables'
            ),
        )

    return get_asset_host(
        cloud_name=env_vars.CLOUDINARY_CLOUD_NAME,
        api_key=env_vars.CLOUDINARY_API_KEY,
        api_secret=env_vars.CLOUDINARY_API_SECRET,
    )
