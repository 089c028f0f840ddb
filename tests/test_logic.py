"""Tests for the subtitle removal pipeline."""

from __future__ import annotations

import base64

import pytest
import pytest_mock

from subtitle_remover.api import EditFailure, EditSuccess, FailureKind, GeminiClient, MissingCredentialError
from subtitle_remover.imaging import EncodedImage, ImageResource
from subtitle_remover.logic import SUBTITLE_REMOVAL_INSTRUCTION, SubtitleRemover

RESOURCE = ImageResource(data=b"\xff\xd8\xff\xe0jpeg", media_type="image/jpeg", name="scene.jpg")


@pytest.fixture
def client(mocker: pytest_mock.MockerFixture):
    instance = mocker.create_autospec(GeminiClient, instance=True)
    instance.submit_edit_request = mocker.AsyncMock(return_value=EditSuccess(image_data="AAAA"))
    return instance


@pytest.mark.asyncio
async def test_remove_encodes_and_submits(client) -> None:
    remover = SubtitleRemover(client)

    result = await remover.remove(RESOURCE)

    assert result == EditSuccess(image_data="AAAA")
    client.submit_edit_request.assert_awaited_once_with(
        EncodedImage(media_type="image/jpeg", data=base64.b64encode(RESOURCE.data).decode("ascii")),
        SUBTITLE_REMOVAL_INSTRUCTION,
    )


@pytest.mark.asyncio
async def test_unreadable_format_skips_network(client) -> None:
    remover = SubtitleRemover(client)
    resource = ImageResource(data=b"bytes", media_type="", name="mystery")

    result = await remover.remove(resource)

    assert result == EditFailure(
        "Failed to process image: Could not determine MIME type from file.",
        FailureKind.UNREADABLE_FORMAT,
    )
    client.submit_edit_request.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_credential_raises_before_encoding(client, mocker: pytest_mock.MockerFixture) -> None:
    client.ensure_credential.side_effect = MissingCredentialError("The API_KEY environment variable is not set.")
    encode = mocker.patch("subtitle_remover.logic.encode_image")
    remover = SubtitleRemover(client)

    with pytest.raises(MissingCredentialError):
        await remover.remove(RESOURCE)

    encode.assert_not_called()
    client.submit_edit_request.assert_not_awaited()


def test_instruction_is_bilingual() -> None:
    assert "자막" in SUBTITLE_REMOVAL_INSTRUCTION
    assert "remove all subtitles and text" in SUBTITLE_REMOVAL_INSTRUCTION
