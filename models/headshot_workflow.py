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

"""Headshot workflow: state record, transitions and the controller that drives them.

The state is an immutable `WorkflowState`. Every transition is a pure function
returning a new record; `HeadshotStudio` owns the current record and applies
transitions in response to user intents and network outcomes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from common.analytics import get_logger
from common.codec import encode_file_to_base64, guess_mime_type
from common.error_handling import (
    GenerationError,
    ImageReadError,
    PromptValidationError,
    describe_error,
)
from config.headshot_presets import (
    CUSTOM_STYLE_ID,
    DEFAULT_STYLE_ID,
    get_preset_prompt,
)
from models.image_edit import edit_image
from services.upload_service import forward_result_in_background, make_result_filename

logger = get_logger(__name__)

SYSTEM_SUFFIX = (
    " Ensure the person's facial identity and features are preserved while"
    " applying the requested changes. Output a high-quality, photorealistic image."
)
READ_ERROR_MESSAGE = "Failed to read image file."
BLANK_CUSTOM_PROMPT_MESSAGE = "Please enter a description for your custom edit."


@dataclass(frozen=True)
class SourceImage:
    content: str  # base64 data URL
    mime_type: str

    def __post_init__(self):
        if not self.mime_type:
            raise ValueError("SourceImage requires a mime_type")


@dataclass(frozen=True)
class StyleChoice:
    style_id: str = DEFAULT_STYLE_ID
    custom_prompt: str = ""

    @property
    def is_custom(self) -> bool:
        return self.style_id == CUSTOM_STYLE_ID


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class InFlight:
    pass


@dataclass(frozen=True)
class Succeeded:
    result_image: str


@dataclass(frozen=True)
class Failed:
    message: str


GenerationStatus = Union[Idle, InFlight, Succeeded, Failed]

IDLE = Idle()
IN_FLIGHT = InFlight()


@dataclass(frozen=True)
class WorkflowState:
    source_image: Optional[SourceImage] = None
    style: StyleChoice = field(default_factory=StyleChoice)
    status: GenerationStatus = IDLE
    # Non-fatal file read problem; never counts as a generation attempt
    read_error: Optional[str] = None


# --- Transitions ---


def image_selected(state: WorkflowState, source_image: SourceImage) -> WorkflowState:
    return replace(state, source_image=source_image, status=IDLE, read_error=None)


def image_read_failed(state: WorkflowState, message: str = READ_ERROR_MESSAGE) -> WorkflowState:
    return replace(state, read_error=message)


def image_cleared(state: WorkflowState) -> WorkflowState:
    return replace(state, source_image=None, status=IDLE, read_error=None)


def style_selected(state: WorkflowState, style_id: str) -> WorkflowState:
    return replace(state, style=replace(state.style, style_id=style_id))


def custom_prompt_changed(state: WorkflowState, text: str) -> WorkflowState:
    return replace(state, style=replace(state.style, custom_prompt=text))


def generation_started(state: WorkflowState) -> WorkflowState:
    return replace(state, status=IN_FLIGHT, read_error=None)


def generation_succeeded(state: WorkflowState, result_image: str) -> WorkflowState:
    return replace(state, status=Succeeded(result_image))


def generation_failed(state: WorkflowState, message: str) -> WorkflowState:
    return replace(state, status=Failed(message), read_error=None)


def result_reset(state: WorkflowState) -> WorkflowState:
    """Drops a finished result so another style can be tried on the same photo."""
    if not isinstance(state.status, Succeeded):
        return state
    return replace(state, status=IDLE)


def compose_instruction(style: StyleChoice) -> str:
    """Builds the full edit instruction for the chosen style.

    Raises:
        PromptValidationError: If the custom style is chosen with blank text.
    """
    if style.is_custom:
        if not style.custom_prompt.strip():
            raise PromptValidationError(BLANK_CUSTOM_PROMPT_MESSAGE)
        prompt = style.custom_prompt
    else:
        prompt = get_preset_prompt(style.style_id)
    return prompt + SYSTEM_SUFFIX


# --- Controller ---

EditClient = Callable[[str, str, str], str]
Uploader = Callable[[str, str], Any]


class HeadshotStudio:
    """Owns a `WorkflowState` and applies transitions for each user intent.

    The edit client, uploader and filename factory are injectable so the
    page can use the real Gemini and upload services while tests use fakes.
    """

    def __init__(
        self,
        state: Optional[WorkflowState] = None,
        edit_client: Optional[EditClient] = None,
        uploader: Optional[Uploader] = None,
        filename_factory: Optional[Callable[[], str]] = None,
    ):
        self._state = state or WorkflowState()
        self._edit_client = edit_client or edit_image
        self._uploader = uploader or forward_result_in_background
        self._filename_factory = filename_factory or make_result_filename

    @property
    def state(self) -> WorkflowState:
        return self._state

    def snapshot(self) -> WorkflowState:
        return self._state

    def select_image(self, file) -> WorkflowState:
        try:
            content = encode_file_to_base64(file)
        except ImageReadError as e:
            logger.error(f"Failed to read file: {e}")
            self._state = image_read_failed(self._state)
            return self._state
        self._state = image_selected(
            self._state, SourceImage(content=content, mime_type=guess_mime_type(file))
        )
        return self._state

    def clear_image(self) -> WorkflowState:
        self._state = image_cleared(self._state)
        return self._state

    def set_style(self, style_id: str) -> WorkflowState:
        self._state = style_selected(self._state, style_id)
        return self._state

    def set_custom_prompt(self, text: str) -> WorkflowState:
        self._state = custom_prompt_changed(self._state, text)
        return self._state

    def reset_result(self) -> WorkflowState:
        self._state = result_reset(self._state)
        return self._state

    def generate(self) -> Iterator[GenerationStatus]:
        """Runs one edit, yielding every status the workflow passes through.

        Yields nothing when there is no source image or an edit is already in
        flight. Errors never escape: they end in a `Failed` status.
        """
        source_image = self._state.source_image
        if source_image is None:
            return
        if isinstance(self._state.status, InFlight):
            logger.info("Generate ignored: an edit is already in flight")
            return

        try:
            instruction = compose_instruction(self._state.style)
        except PromptValidationError as e:
            self._state = generation_failed(self._state, e.user_message())
            yield self._state.status
            return

        self._state = generation_started(self._state)
        yield self._state.status

        try:
            result_image = self._edit_client(
                source_image.content, source_image.mime_type, instruction
            )
            if not result_image:
                raise GenerationError()
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            self._state = generation_failed(self._state, describe_error(e))
            yield self._state.status
            return

        self._state = generation_succeeded(self._state, result_image)
        self._forward_result(result_image)
        yield self._state.status

    def _forward_result(self, result_image: str) -> None:
        """Hands the result to the uploader; its outcome never reaches the state."""
        try:
            filename = self._filename_factory()
            self._uploader(result_image, filename)
        except Exception as e:
            logger.error(f"Silent upload error: {e}")
