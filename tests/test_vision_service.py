"""Tests for vision service."""

import asyncio

import pytest

from macro_tracker.domain.errors import AIProviderError, ProviderErrorCode
from macro_tracker.services.vision import (
    VisionService,
    _to_data_url,
    categorize_provider_error,
)
from tests.conftest import FakeVisionClient


class FakeProviderError(Exception):
    def __init__(
        self, message: str, status_code: int | None = None, code: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def test_vision_service_returns_estimate() -> None:
    service = VisionService(client=FakeVisionClient(), model="gpt-4o")

    result = asyncio.run(service.estimate(b"image-bytes"))

    assert result.name == "Chicken rice bowl"
    assert result.calories == pytest.approx(612.6)
    assert result.fiber == pytest.approx(3.1)


def test_vision_service_without_client_reports_missing_key() -> None:
    service = VisionService(client=None, model="gpt-4o")

    with pytest.raises(AIProviderError) as excinfo:
        asyncio.run(service.estimate(b"image-bytes"))

    assert excinfo.value.code == ProviderErrorCode.NO_API_KEY
    assert excinfo.value.status == 400


def test_vision_service_maps_provider_failures() -> None:
    client = FakeVisionClient(error=FakeProviderError("Rate limited", status_code=429))
    service = VisionService(client=client, model="gpt-4o")

    with pytest.raises(AIProviderError) as excinfo:
        asyncio.run(service.estimate(b"image-bytes"))

    assert excinfo.value.code == ProviderErrorCode.RATE_LIMIT
    assert isinstance(excinfo.value.__cause__, FakeProviderError)


def test_vision_service_rejects_malformed_payload() -> None:
    client = FakeVisionClient(payload={"name": "Soup", "calories": -5})
    service = VisionService(client=client, model="gpt-4o")

    with pytest.raises(AIProviderError) as excinfo:
        asyncio.run(service.estimate(b"image-bytes"))

    assert excinfo.value.code == ProviderErrorCode.UNKNOWN
    assert excinfo.value.status == 500


@pytest.mark.parametrize(
    ("error", "code", "status"),
    [
        (
            FakeProviderError("bad key", status_code=401),
            ProviderErrorCode.INVALID_KEY,
            401,
        ),
        (
            FakeProviderError("slow down", status_code=429),
            ProviderErrorCode.RATE_LIMIT,
            429,
        ),
        (
            FakeProviderError("no credits", status_code=429, code="insufficient_quota"),
            ProviderErrorCode.QUOTA_EXCEEDED,
            402,
        ),
        (FakeProviderError("Connection error."), ProviderErrorCode.NETWORK_ERROR, 503),
        (OSError("connect ECONNREFUSED"), ProviderErrorCode.NETWORK_ERROR, 503),
        (RuntimeError("boom"), ProviderErrorCode.UNKNOWN, 500),
    ],
)
def test_categorize_provider_error(
    error: Exception, code: ProviderErrorCode, status: int
) -> None:
    categorized = categorize_provider_error(error)

    assert categorized.code == code
    assert categorized.status == status


def test_categorize_keeps_existing_provider_errors() -> None:
    error = AIProviderError(ProviderErrorCode.NO_API_KEY, "missing", status=400)

    assert categorize_provider_error(error) is error


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    data = b"unknown"
    url = _to_data_url(data)

    assert url.startswith("data:image/jpeg;base64,")
