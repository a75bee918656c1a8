"""
Environment variable models for type-safe configuration.

Each Lambda function reads its provider credentials from the environment.
The models below validate them once per cold start through
aws-lambda-env-modeler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import Field


class CheckoutEnvVars(BaseEnvModel):
    """Environment variables for the checkout function."""

    # Presence is checked by the checkout handler
    SQUARE_ACCESS_TOKEN: Annotated[Optional[str], Field(
        default=None,
        description='Square access token used to create payment links'
    )] = None

    # "production" selects the production API, anything else the sandbox
    SQUARE_ENVIRONMENT: Annotated[str, Field(
        default='sandbox',
        description='Square API environment'
    )] = 'sandbox'

    SQUARE_LOCATION_ID: Annotated[Optional[str], Field(
        default=None,
        description='Fixed Square location id; the first merchant location is used when unset'
    )] = None

    @property
    def is_production(self) -> bool:
        """Check if payments go to the production Square account."""
        return self.SQUARE_ENVIRONMENT == 'production'


class AssetHostEnvVars(BaseEnvModel):
    """Cloudinary credentials, optional so their absence can be reported explicitly."""

    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET)


class DesignUploadEnvVars(AssetHostEnvVars):
    """Environment variables for the design upload function."""

    RESEND_API_KEY: Annotated[Optional[str], Field(
        default=None,
        description='Resend API key; notifications are only logged when unset'
    )] = None

    NOTIFICATION_FROM_ADDRESS: Annotated[str, Field(
        default='MagicCardPrint <orders@resend.dev>',
        description='Sender of order notification emails'
    )] = 'MagicCardPrint <orders@resend.dev>'

    NOTIFICATION_TO_ADDRESS: Annotated[str, Field(
        default='magiccardprint@gmail.com',
        description='Recipient of order notification emails'
    )] = 'magiccardprint@gmail.com'


def get_checkout_env_vars() -> CheckoutEnvVars:
    return get_environment_variables(model=CheckoutEnvVars)


def get_asset_host_env_vars() -> AssetHostEnvVars:
    return get_environment_variables(model=AssetHostEnvVars)


def get_design_upload_env_vars() -> DesignUploadEnvVars:
    return get_environment_variables(model=DesignUploadEnvVars)
