"""
Unit tests for the design upload service.
"""

import base64
import json
from datetime import datetime, timezone

import pytest

from badge_intake.handlers.utils.errors import ProviderError
from badge_intake.logic.design_upload import DesignUploadService, encode_json_data_uri, order_folder, strip_extension
from badge_intake.logic.email_notifier import EmailNotifier
from badge_intake.models.input import DesignUploadRequest
from fakes import FakeAssetHost, FakeMailSender

UPLOADED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def decode_data_uri(uri: str) -> dict:
    prefix = "data:application/json;base64,"
    assert uri.startswith(prefix)
    return json.loads(base64.b64decode(uri[len(prefix):]))


@pytest.fixture
def build_service(mail_sender):
    def build(asset_host: FakeAssetHost) -> DesignUploadService:
        notifier = EmailNotifier(
            mail_sender=mail_sender,
            sender="MagicCardPrint <orders@resend.dev>",
            recipient="shop@example.com",
            clock=lambda: UPLOADED_AT,
        )
        return DesignUploadService(asset_host=asset_host, notifier=notifier, clock=lambda: UPLOADED_AT)

    return build


class TestHelpers:

    @pytest.mark.parametrize("filename,expected", [
        ("jane.jpg", "jane"),
        ("jane.doe.jpg", "jane.doe"),
        ("jane", "jane"),
    ])
    def test_strip_extension(self, filename, expected):
        assert strip_extension(filename) == expected

    def test_order_folder(self):
        assert order_folder("MCP-1") == "magiccardprint/MCP-1"

    def test_encode_json_data_uri(self):
        assert decode_data_uri(encode_json_data_uri({"a": 1})) == {"a": 1}


class TestDesignUploadService:
    """Test cases for DesignUploadService."""

    def test_single_order(self, build_service, sample_design_data, mail_sender):
        host = FakeAssetHost()
        request = DesignUploadRequest.model_validate(sample_design_data)

        images = build_service(host).upload_design(request)

        assert [image.side for image in images] == ["front", "back"]
        assert [upload["public_id"] for upload in host.uploads] == ["front", "back", "specifications"]

        front = host.upload_for("front")
        assert front["folder"] == "magiccardprint/MCP-1001"
        assert front["resource_type"] == "image"
        assert front["tags"] == ["MCP-1001", "jane.smith@example.com", "single-order"]

        assert host.upload_for("specifications")["resource_type"] == "raw"
        assert len(mail_sender.sent) == 1

    def test_bulk_order_with_failing_photo(self, build_service, sample_design_data):
        host = FakeAssetHost(failing_public_ids={"bob"})
        sample_design_data.update({
            "isBulkOrder": True,
            "excelFile": "data:application/vnd.ms-excel;base64,AA==",
            "excelFileName": "staff.xlsx",
            "excelData": [{"name": "Alice"}, {"name": "Bob"}, {"name": "Carol"}],
            "bulkPhotos": [
                {"name": "alice.jpg", "data": "data:image/jpeg;base64,QQ=="},
                {"name": "bob.jpg", "data": "data:image/jpeg;base64,Qg=="},
                {"name": "carol.jpg", "data": "data:image/jpeg;base64,Qw=="},
            ],
        })
        request = DesignUploadRequest.model_validate(sample_design_data)

        images = build_service(host).upload_design(request)

        assert [(image.side, image.type, image.name) for image in images] == [
            ("front", None, None),
            ("back", None, None),
            (None, "excel", None),
            (None, "photo", "alice.jpg"),
            (None, "photo", "carol.jpg"),
        ]

        excel = host.upload_for("bulk-data_staff.xlsx")
        assert excel["resource_type"] == "raw"
        assert excel["tags"] == ["MCP-1001", "excel", "bulk-order"]
        assert host.upload_for("alice")["folder"] == "magiccardprint/MCP-1001/photos"
        assert host.upload_for("front")["tags"][-1] == "bulk-order"

    def test_unexpected_upload_errors_are_isolated(self, build_service, sample_design_data, mail_sender):
        """Non-provider failures of optional uploads do not fail the order."""
        host = FakeAssetHost(upload_errors={
            "bulk-data_staff.xlsx": FileNotFoundError("No such file or directory"),
            "bob": RuntimeError("read timed out"),
        })
        sample_design_data.update({
            "isBulkOrder": True,
            "excelFile": "data:application/vnd.openxmlformats-officedocument.spreadsheetml.sheet;base64,UEsDBA==",
            "excelFileName": "staff.xlsx",
            "bulkPhotos": [
                {"name": "alice.jpg", "data": "data:image/jpeg;base64,QQ=="},
                {"name": "bob.jpg", "data": "data:image/jpeg;base64,Qg=="},
            ],
        })

        images = build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert [(image.side, image.name) for image in images] == [
            ("front", None),
            ("back", None),
            (None, "alice.jpg"),
        ]
        assert host.upload_for("specifications")
        assert len(mail_sender.sent) == 1

    def test_incomplete_file_entries_skipped(self, build_service, sample_design_data):
        host = FakeAssetHost()
        sample_design_data.update({
            "isBulkOrder": True,
            "bulkPhotos": [
                {"data": "data:image/jpeg;base64,QQ=="},
                {"name": "", "data": "data:image/jpeg;base64,QQ=="},
                {"name": "bob.jpg"},
                {"name": "carol.jpg", "data": "data:image/jpeg;base64,Qw=="},
            ],
            "hasArtwork": True,
            "artworkFiles": [{"name": "final.png"}],
        })

        images = build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert [image.name for image in images if image.type] == ["carol.jpg"]
        assert [upload["public_id"] for upload in host.uploads] == ["front", "back", "carol", "specifications"]

    def test_photos_ignored_without_bulk_flag(self, build_service, sample_design_data):
        host = FakeAssetHost()
        sample_design_data["bulkPhotos"] = [{"name": "alice.jpg", "data": "x"}]

        images = build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert all(image.type != "photo" for image in images)

    def test_artwork_uploaded(self, build_service, sample_design_data):
        host = FakeAssetHost()
        sample_design_data.update({
            "hasArtwork": True,
            "artworkFiles": [{"name": "final.png", "data": "data:image/png;base64,AA=="}],
        })

        images = build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert images[-1].type == "artwork"
        assert images[-1].name == "final.png"
        artwork = host.upload_for("final")
        assert artwork["folder"] == "magiccardprint/MCP-1001/artwork"
        assert artwork["tags"] == ["MCP-1001", "artwork"]

    def test_excel_failure_is_not_fatal(self, build_service, sample_design_data):
        host = FakeAssetHost(failing_public_ids={"bulk-data_data"})
        sample_design_data.update({"isBulkOrder": True, "excelFile": "data:,x"})

        images = build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert [image.side for image in images] == ["front", "back"]

    def test_front_failure_is_fatal(self, build_service, sample_design_data, mail_sender):
        host = FakeAssetHost(failing_public_ids={"front"})

        with pytest.raises(ProviderError):
            build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert mail_sender.sent == []

    def test_specifications_failure_is_fatal(self, build_service, sample_design_data, mail_sender):
        host = FakeAssetHost(failing_public_ids={"specifications"})

        with pytest.raises(ProviderError):
            build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert mail_sender.sent == []

    def test_notification_failure_is_not_fatal(self, sample_design_data):
        host = FakeAssetHost()
        notifier = EmailNotifier(
            mail_sender=FakeMailSender(error=ProviderError(message="Resend down", provider="resend")),
            sender="orders@example.com",
            recipient="shop@example.com",
        )
        service = DesignUploadService(asset_host=host, notifier=notifier)

        images = service.upload_design(DesignUploadRequest.model_validate(sample_design_data))

        assert len(images) == 2

    def test_specifications_snapshot(self, build_service, sample_design_data, sample_specifications):
        host = FakeAssetHost()
        sample_design_data.pop("customerEmail")

        build_service(host).upload_design(DesignUploadRequest.model_validate(sample_design_data))

        upload = host.upload_for("specifications")
        assert upload["tags"] == ["MCP-1001", "no-email"]

        snapshot = decode_data_uri(upload["file"])
        assert snapshot["referenceId"] == "MCP-1001"
        assert snapshot["customerEmail"] is None
        assert snapshot["specifications"] == sample_specifications
        assert snapshot["isBulkOrder"] is False
        assert snapshot["uploadedAt"].startswith("2024-01-01T12:00:00")
        assert snapshot["uploadedFiles"] == [
            {"side": "front", "url": "https://res.cloudinary.com/demo/image/upload/magiccardprint/MCP-1001/front"},
            {"side": "back", "url": "https://res.cloudinary.com/demo/image/upload/magiccardprint/MCP-1001/back"},
        ]
