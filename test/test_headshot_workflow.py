# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import base64
import io
import re
from unittest import mock

import pytest

from common.codec import decode_data_url
from common.error_handling import GENERIC_GENERATION_ERROR, GenerationError
from config.headshot_presets import CUSTOM_STYLE_ID, FALLBACK_PROMPT, get_preset
from models.headshot_workflow import (
    BLANK_CUSTOM_PROMPT_MESSAGE,
    IDLE,
    IN_FLIGHT,
    READ_ERROR_MESSAGE,
    SYSTEM_SUFFIX,
    Failed,
    HeadshotStudio,
    SourceImage,
    StyleChoice,
    Succeeded,
    WorkflowState,
)
from services import upload_service

RESULT = "data:image/png;base64,AAAA"
FILENAME_PATTERN = re.compile(r"^nanoheadshot_\d+\.png$")


class FakeEditClient:
    def __init__(self, result=RESULT, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, source_image, mime_type, instruction):
        self.calls.append((source_image, mime_type, instruction))
        if self.error:
            raise self.error
        return self.result


def _studio(edit_client=None, uploader=None, state=None):
    return HeadshotStudio(
        state=state,
        edit_client=edit_client or FakeEditClient(),
        uploader=uploader or mock.Mock(),
    )


def test_select_image_round_trips_content_and_mime(png_upload, png_bytes):
    studio = _studio()

    state = studio.select_image(png_upload)

    assert state.source_image.mime_type == "image/png"
    assert decode_data_url(state.source_image.content) == ("image/png", png_bytes)
    assert state.status == IDLE
    assert state.read_error is None


def test_select_image_resets_previous_generation(png_upload):
    studio = _studio(state=WorkflowState(status=Failed("earlier failure")))

    assert studio.select_image(png_upload).status == IDLE


def test_select_image_read_failure_keeps_existing_image(png_upload):
    studio = _studio()
    studio.select_image(png_upload)
    original = studio.state.source_image

    broken = io.BytesIO(b"data")
    broken.close()
    state = studio.select_image(broken)

    assert state.source_image == original
    assert state.read_error == READ_ERROR_MESSAGE
    # A read failure is not a generation attempt
    assert state.status == IDLE


def test_clear_image_resets_everything(png_upload):
    studio = _studio(state=WorkflowState(status=Succeeded(RESULT)))
    studio.select_image(png_upload)

    state = studio.clear_image()

    assert state.source_image is None
    assert state.status == IDLE


def test_generate_without_image_is_a_noop():
    edit_client = FakeEditClient()
    uploader = mock.Mock()
    studio = _studio(edit_client, uploader)
    before = studio.snapshot()

    assert list(studio.generate()) == []
    assert studio.snapshot() == before
    assert edit_client.calls == []
    uploader.assert_not_called()


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_generate_blank_custom_prompt_fails_without_network(png_upload, text):
    edit_client = FakeEditClient()
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    studio.set_style(CUSTOM_STYLE_ID)
    studio.set_custom_prompt(text)

    statuses = list(studio.generate())

    assert statuses == [Failed(BLANK_CUSTOM_PROMPT_MESSAGE)]
    assert edit_client.calls == []


def test_generate_with_preset_succeeds_and_sends_full_instruction(png_upload):
    edit_client = FakeEditClient()
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    studio.set_style("corporate-grey")

    statuses = list(studio.generate())

    assert statuses == [IN_FLIGHT, Succeeded(RESULT)]
    assert studio.state.status == Succeeded(RESULT)
    (source_image, mime_type, instruction), = edit_client.calls
    assert source_image == studio.state.source_image.content
    assert mime_type == "image/png"
    assert instruction == get_preset("corporate-grey")["prompt"] + SYSTEM_SUFFIX
    assert SYSTEM_SUFFIX.startswith(" Ensure the person's facial identity")


def test_generate_with_custom_prompt_uses_text(png_upload):
    edit_client = FakeEditClient()
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    studio.set_style(CUSTOM_STYLE_ID)
    studio.set_custom_prompt("Give me a navy blazer")

    list(studio.generate())

    assert edit_client.calls[0][2] == "Give me a navy blazer" + SYSTEM_SUFFIX


def test_generate_with_unknown_preset_uses_fallback_prompt(png_upload):
    edit_client = FakeEditClient()
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    studio.set_style("no-such-style")

    list(studio.generate())

    assert edit_client.calls[0][2] == FALLBACK_PROMPT + SYSTEM_SUFFIX


def test_generate_surfaces_client_error_message(png_upload):
    studio = _studio(FakeEditClient(error=Exception("quota exceeded")))
    studio.select_image(png_upload)

    statuses = list(studio.generate())

    assert statuses == [IN_FLIGHT, Failed("quota exceeded")]


def test_generate_uses_fallback_message_for_empty_errors(png_upload):
    studio = _studio(FakeEditClient(error=GenerationError()))
    studio.select_image(png_upload)

    list(studio.generate())

    assert studio.state.status == Failed(GENERIC_GENERATION_ERROR)


def test_generate_treats_empty_result_as_failure(png_upload):
    studio = _studio(FakeEditClient(result=""))
    studio.select_image(png_upload)

    list(studio.generate())

    assert studio.state.status == Failed(GENERIC_GENERATION_ERROR)


def test_generate_while_in_flight_is_ignored(png_upload):
    edit_client = FakeEditClient()
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    studio = _studio(edit_client, state=WorkflowState(
        source_image=studio.state.source_image, status=IN_FLIGHT
    ))

    assert list(studio.generate()) == []
    assert edit_client.calls == []


def test_regenerate_after_failure(png_upload):
    edit_client = FakeEditClient(error=Exception("temporary"))
    studio = _studio(edit_client)
    studio.select_image(png_upload)
    list(studio.generate())

    edit_client.error = None
    statuses = list(studio.generate())

    assert statuses == [IN_FLIGHT, Succeeded(RESULT)]


def test_successful_generate_uploads_once_with_timestamped_name(png_upload):
    uploader = mock.Mock()
    studio = _studio(uploader=uploader)
    studio.select_image(png_upload)

    list(studio.generate())

    uploader.assert_called_once()
    result_image, filename = uploader.call_args.args
    assert result_image == RESULT
    assert FILENAME_PATTERN.match(filename)


def test_failed_generate_does_not_upload(png_upload):
    uploader = mock.Mock()
    studio = _studio(FakeEditClient(error=Exception("nope")), uploader)
    studio.select_image(png_upload)

    list(studio.generate())

    uploader.assert_not_called()


def test_upload_failure_never_reaches_state(png_upload):
    uploader = mock.Mock(side_effect=RuntimeError("endpoint down"))
    studio = _studio(uploader=uploader)
    studio.select_image(png_upload)

    statuses = list(studio.generate())

    assert statuses == [IN_FLIGHT, Succeeded(RESULT)]
    assert studio.state.status == Succeeded(RESULT)
    uploader.assert_called_once()


def test_reset_result_keeps_image_and_style(png_upload):
    studio = _studio()
    studio.select_image(png_upload)
    studio.set_style("studio-black")
    list(studio.generate())
    before = studio.snapshot()

    state = studio.reset_result()

    assert state.status == IDLE
    assert state.source_image == before.source_image
    assert state.style == before.style == StyleChoice(style_id="studio-black")


def test_reset_result_outside_success_changes_nothing():
    state = WorkflowState(status=Failed("bad"))
    studio = _studio(state=state)

    assert studio.reset_result() == state


def test_source_image_requires_mime_type():
    with pytest.raises(ValueError):
        SourceImage(content=RESULT, mime_type="")


def test_end_to_end_corporate_grey_upload(png_upload):
    endpoint = "http://collector.test/upload"
    futures = []

    def uploader(result_image, filename):
        future = upload_service.forward_result_in_background(
            result_image, filename, endpoint_url=endpoint
        )
        futures.append(future)
        return future

    studio = HeadshotStudio(edit_client=FakeEditClient(), uploader=uploader)

    with mock.patch.object(upload_service.requests, "post") as post:
        post.return_value.ok = True
        post.return_value.json.return_value = {"ok": True}

        studio.select_image(png_upload)
        studio.set_style("corporate-grey")
        list(studio.generate())

        assert studio.state.status == Succeeded(RESULT)
        assert len(futures) == 1
        assert futures[0].result(timeout=5) == {"ok": True}

    post.assert_called_once()
    assert post.call_args.args[0] == endpoint
    filename, data, mime_type = post.call_args.kwargs["files"]["file"]
    assert FILENAME_PATTERN.match(filename)
    assert data == base64.b64decode("AAAA")
    assert mime_type == "image/png"
