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
"""NanoShot Studio - turn a casual photo into a professional headshot."""

import uuid

import mesop as me

from common.analytics import log_page_view, track_click
from components.result_display.result_display import result_display
from components.style_selector.style_selector import style_selector
from config.default import Default as cfg
from config.gemini_image_models import get_gemini_image_model_config
from config.headshot_presets import PRESET_STYLES
from models.headshot_workflow import HeadshotStudio
from state.headshot_state import (
    STATUS_FAILED,
    STATUS_IN_FLIGHT,
    STATUS_SUCCEEDED,
    PageState,
    apply_workflow_state,
    to_workflow_state,
)
from state.state import AppState

PAGE_NAME = "headshot"

SECTION_STYLE = me.Style(
    display="flex",
    flex_direction="column",
    gap=16,
    padding=me.Padding.all(16),
    border_radius=12,
    background=me.theme_var("surface-container-low"),
)


def _studio(state: PageState) -> HeadshotStudio:
    """Rebuilds the workflow controller from the serialized page state."""
    return HeadshotStudio(state=to_workflow_state(state))


def on_upload(e: me.UploadEvent):
    """Reads the selected photo into the workflow."""
    state = me.state(PageState)
    studio = _studio(state)
    studio.select_image(e.file)
    apply_workflow_state(state, studio.snapshot())
    yield


@track_click(element_id="headshot_clear_image")
def on_clear_click(e: me.ClickEvent):
    state = me.state(PageState)
    studio = _studio(state)
    studio.clear_image()
    apply_workflow_state(state, studio.snapshot())
    # A new key re-creates the uploader so the same file can be picked again
    state.uploader_key += 1
    yield


def on_style_click(e: me.ClickEvent):
    state = me.state(PageState)
    studio = _studio(state)
    studio.set_style(e.key)
    apply_workflow_state(state, studio.snapshot())
    yield


def on_custom_prompt_blur(e: me.InputBlurEvent):
    """Updates the custom prompt when the textarea loses focus."""
    state = me.state(PageState)
    studio = _studio(state)
    studio.set_custom_prompt(e.value)
    apply_workflow_state(state, studio.snapshot())


@track_click(element_id="headshot_generate")
def on_generate_click(e: me.ClickEvent):
    """Runs the edit, re-rendering after every status change."""
    state = me.state(PageState)
    studio = _studio(state)
    for _ in studio.generate():
        apply_workflow_state(state, studio.snapshot())
        yield


@track_click(element_id="headshot_try_another_style")
def on_reset_click(e: me.ClickEvent):
    state = me.state(PageState)
    studio = _studio(state)
    studio.reset_result()
    apply_workflow_state(state, studio.snapshot())
    yield


@me.component
def _header():
    model_config = get_gemini_image_model_config(cfg().GEMINI_IMAGE_GEN_MODEL)
    model_label = model_config.display_name if model_config else cfg().GEMINI_IMAGE_GEN_MODEL
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            justify_content="space-between",
            align_items="center",
            padding=me.Padding.symmetric(vertical=12, horizontal=24),
            border=me.Border(
                bottom=me.BorderSide(width=1, style="solid", color=me.theme_var("outline-variant"))
            ),
        )
    ):
        with me.box(style=me.Style(display="flex", align_items="center", gap=8)):
            me.icon("photo_camera")
            me.text(cfg().APP_TITLE, type="headline-6")
        me.text(f"Powered by {model_label}", style=me.Style(font_size=13))


@me.component
def _upload_section():
    state = me.state(PageState)
    with me.box(style=SECTION_STYLE):
        me.text("1. Upload Photo", type="headline-6")
        if state.source_image:
            me.image(
                src=state.source_image,
                style=me.Style(width="100%", max_width=360, border_radius=12),
            )
            me.button(
                "Remove photo",
                on_click=on_clear_click,
                type="stroked",
                disabled=state.status == STATUS_IN_FLIGHT,
            )
            me.text("Great shot! Now choose a style to transform it.")
        else:
            me.uploader(
                label="Upload Image",
                on_upload=on_upload,
                accepted_file_types=["image/jpeg", "image/png", "image/webp"],
                key=f"headshot_uploader_{state.uploader_key}",
                type="flat",
            )
        if state.read_error:
            _error_banner(state.read_error)


@me.component
def _error_banner(message: str):
    with me.box(
        style=me.Style(
            display="flex",
            align_items="center",
            gap=8,
            padding=me.Padding.all(12),
            border_radius=12,
            background=me.theme_var("error-container"),
            color=me.theme_var("on-error-container"),
        )
    ):
        me.icon("error")
        me.text(message)


@me.component
def _style_section():
    state = me.state(PageState)
    is_generating = state.status == STATUS_IN_FLIGHT
    with me.box(style=SECTION_STYLE):
        me.text("2. Select Style", type="headline-6")
        style_selector(
            presets=PRESET_STYLES,
            selected_style_id=state.selected_style_id,
            custom_prompt=state.custom_prompt,
            on_select_style=on_style_click,
            on_custom_prompt_blur=on_custom_prompt_blur,
            disabled=not state.source_image or is_generating,
        )

        if state.status == STATUS_FAILED and state.error_message:
            _error_banner(state.error_message)

        if is_generating:
            with me.content_button(type="raised", disabled=True):
                with me.box(
                    style=me.Style(display="flex", flex_direction="row", align_items="center", gap=8)
                ):
                    me.progress_spinner(diameter=20, stroke_width=3)
                    me.text("Transforming...")
        else:
            me.button(
                "Generate Headshot",
                on_click=on_generate_click,
                type="raised",
                disabled=not state.source_image,
            )
        me.text(
            "Process usually takes 5-10 seconds.",
            style=me.Style(font_size=12, color=me.theme_var("on-surface-variant")),
        )


def on_load(e: me.LoadEvent):
    app_state = me.state(AppState)
    app_state.current_page = PAGE_NAME
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    log_page_view(PAGE_NAME, session_id=app_state.session_id)
    yield


@me.page(
    path="/",
    title="NanoShot Studio",
    on_load=on_load,
)
def page():
    """Define the Mesop page route for the headshot studio."""
    state = me.state(PageState)

    _header()
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            gap=24,
            max_width=1100,
            margin=me.Margin.symmetric(horizontal="auto"),
            padding=me.Padding.all(24),
        )
    ):
        if not state.source_image:
            me.text("Professional Headshots Reimagined by AI", type="headline-4")
            me.text(
                "Upload a casual selfie and transform it into a professional profile picture."
            )

        if state.status == STATUS_SUCCEEDED:
            with me.box(style=SECTION_STYLE):
                me.text("Transformation Complete", type="headline-6")
                result_display(
                    original_image=state.source_image,
                    generated_image=state.result_image,
                    on_reset=on_reset_click,
                )
        else:
            _upload_section()
            _style_section()
