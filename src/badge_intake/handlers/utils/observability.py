"""
Shared Powertools instances for the order-intake handlers.

Every handler module and logic module logs, traces and emits metrics through
the objects defined here so that correlation ids and the cold start flag are
shared across one invocation.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import MetricUnit, Metrics
from aws_lambda_powertools.tracing import Tracer

SERVICE_NAME = 'magiccardprint-intake'
METRICS_NAMESPACE = 'MagicCardPrint'

# Level comes from POWERTOOLS_LOG_LEVEL, INFO when unset
logger: Logger = Logger(service=SERVICE_NAME)

# Disabled outside Lambda or when POWERTOOLS_TRACE_DISABLED is "true"
tracer: Tracer = Tracer(service=SERVICE_NAME)

metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


def count(name: str, value: int = 1) -> None:
    """Add a Count metric to the current invocation."""
    metrics.add_metric(name=name, unit=MetricUnit.Count, value=value)
