"""
Pytest configuration and shared fixtures for the order-intake service.

Provides the test environment, a mock Lambda context, an API Gateway event
factory and in-memory fakes of the Square, Cloudinary and Resend clients.
"""

import json
import os
from typing import Any, Callable, Dict
from unittest.mock import Mock

import pytest

from fakes import FakeAssetHost, FakeMailSender, FakePaymentsGateway


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "ENVIRONMENT": "test",
        "POWERTOOLS_SERVICE_NAME": "test-magiccardprint-intake",
        "POWERTOOLS_METRICS_NAMESPACE": "TestMagicCardPrint",
        "POWERTOOLS_LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    })


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = "512"
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory building API Gateway REST proxy events."""

    def build(method: str, path: str, body: Any = None) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)

        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {
                "Content-Type": "application/json",
                "Origin": "https://magiccardprint-designer.vercel.app",
                "User-Agent": "test-agent/1.0",
            },
            "multiValueHeaders": {},
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "resourcePath": path,
                "httpMethod": method,
                "path": f"/test{path}",
                "protocol": "HTTP/1.1",
                "requestTime": "01/Jan/2024:12:00:00 +0000",
                "requestTimeEpoch": 1704110400000,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "body": body,
            "isBase64Encoded": False,
        }

    return build


@pytest.fixture
def payments_gateway() -> FakePaymentsGateway:
    return FakePaymentsGateway()


@pytest.fixture
def asset_host() -> FakeAssetHost:
    return FakeAssetHost()


@pytest.fixture
def mail_sender() -> FakeMailSender:
    return FakeMailSender()


# Sample data fixtures
@pytest.fixture
def sample_order_data() -> Dict[str, Any]:
    """Checkout request as posted by the badge designer."""
    return {
        "referenceId": "MCP-1001",
        "customerName": "Jane Smith",
        "customerEmail": "jane.smith@example.com",
        "quantity": 3,
        "unitPrice": 12.5,
        "specifications": {"badgeStyle": "classic"},
    }


@pytest.fixture
def sample_specifications() -> Dict[str, Any]:
    return {
        "orderType": "Bulk Order",
        "badgeStyle": "Classic",
        "cardType": "PVC",
        "orientation": "Portrait",
        "holeSlot": "Slot",
        "proofApproval": True,
        "deliveryDate": "2024-02-01",
        "additionalInstructions": "Matte finish",
    }


@pytest.fixture
def sample_design_data(sample_specifications) -> Dict[str, Any]:
    """Design upload request as posted by the badge designer."""
    return {
        "frontImage": "data:image/png;base64,RlJPTlQ=",
        "backImage": "data:image/png;base64,QkFDSw==",
        "referenceId": "MCP-1001",
        "customerName": "Jane Smith",
        "customerEmail": "jane.smith@example.com",
        "specifications": sample_specifications,
    }


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(scope="session")
def integration_client():
    """HTTP client against a deployed stage; set API_BASE_URL to enable."""
    import httpx

    base_url = os.environ.get("API_BASE_URL")
    if not base_url:
        pytest.skip("API_BASE_URL not set")

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        yield client
