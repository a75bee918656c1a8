"""
Lambda function entry point for the template catalog API.

Delegates to ``badge_intake.handlers.templates_handler``, which owns routing, validation,
error handling and observability.
"""

import os
import sys
from typing import Any, Dict

# Add the service package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from badge_intake.handlers.templates_handler import lambda_handler as templates_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return templates_handler(event, context)
