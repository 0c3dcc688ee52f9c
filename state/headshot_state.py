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

import mesop as me

from config.headshot_presets import DEFAULT_STYLE_ID
from models.headshot_workflow import (
    IDLE,
    IN_FLIGHT,
    Failed,
    InFlight,
    SourceImage,
    StyleChoice,
    Succeeded,
    WorkflowState,
)

STATUS_IDLE = "idle"
STATUS_IN_FLIGHT = "in_flight"
STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"


@me.stateclass
class PageState:
    """Headshot Page State"""

    # Input
    source_image: str = ""  # data URL
    mime_type: str = ""
    selected_style_id: str = DEFAULT_STYLE_ID
    custom_prompt: str = ""

    # Generation
    status: str = STATUS_IDLE
    result_image: str = ""
    error_message: str = ""
    read_error: str = ""

    # UI
    uploader_key: int = 0


def to_workflow_state(page_state) -> WorkflowState:
    """Rebuilds the workflow record from the serialized page state."""
    source_image = None
    if page_state.source_image:
        source_image = SourceImage(
            content=page_state.source_image, mime_type=page_state.mime_type
        )

    if page_state.status == STATUS_IN_FLIGHT:
        status = IN_FLIGHT
    elif page_state.status == STATUS_SUCCEEDED and page_state.result_image:
        status = Succeeded(page_state.result_image)
    elif page_state.status == STATUS_FAILED:
        status = Failed(page_state.error_message)
    else:
        status = IDLE

    return WorkflowState(
        source_image=source_image,
        style=StyleChoice(
            style_id=page_state.selected_style_id,
            custom_prompt=page_state.custom_prompt,
        ),
        status=status,
        read_error=page_state.read_error or None,
    )


def apply_workflow_state(page_state, workflow_state: WorkflowState) -> None:
    """Copies a workflow record onto the page state for rendering."""
    source_image = workflow_state.source_image
    page_state.source_image = source_image.content if source_image else ""
    page_state.mime_type = source_image.mime_type if source_image else ""
    page_state.selected_style_id = workflow_state.style.style_id
    page_state.custom_prompt = workflow_state.style.custom_prompt
    page_state.read_error = workflow_state.read_error or ""

    status = workflow_state.status
    page_state.result_image = ""
    page_state.error_message = ""
    if isinstance(status, InFlight):
        page_state.status = STATUS_IN_FLIGHT
    elif isinstance(status, Succeeded):
        page_state.status = STATUS_SUCCEEDED
        page_state.result_image = status.result_image
    elif isinstance(status, Failed):
        page_state.status = STATUS_FAILED
        page_state.error_message = status.message
    else:
        page_state.status = STATUS_IDLE
