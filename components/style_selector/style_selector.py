"""Preset style chips plus a free-text custom prompt."""

from collections.abc import Callable

import mesop as me

from config.headshot_presets import CUSTOM_STYLE_ID

CHIP_STYLE = me.Style(
    padding=me.Padding(top=4, right=12, bottom=4, left=12),
    border_radius=8,
    font_size=14,
)


@me.component
def style_selector(
    presets: list[dict],
    selected_style_id: str,
    custom_prompt: str,
    on_select_style: Callable,
    on_custom_prompt_blur: Callable,
    disabled: bool = False,
):
    """Renders one chip per preset and a custom option with its textarea."""
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            flex_wrap="wrap",
            gap=8,
            opacity=0.5 if disabled else 1.0,
        )
    ):
        for preset in presets:
            me.button(
                preset["label"],
                key=preset["key"],
                on_click=on_select_style,
                type="flat" if preset["key"] == selected_style_id else "stroked",
                disabled=disabled,
                style=CHIP_STYLE,
            )
        me.button(
            "Custom",
            key=CUSTOM_STYLE_ID,
            on_click=on_select_style,
            type="flat" if selected_style_id == CUSTOM_STYLE_ID else "stroked",
            disabled=disabled,
            style=CHIP_STYLE,
        )

    selected = next((p for p in presets if p["key"] == selected_style_id), None)
    if selected:
        me.text(
            selected["description"],
            style=me.Style(font_size=14, color=me.theme_var("on-surface-variant")),
        )

    if selected_style_id == CUSTOM_STYLE_ID:
        me.textarea(
            label="Describe your edit",
            value=custom_prompt,
            on_blur=on_custom_prompt_blur,
            rows=3,
            autosize=True,
            disabled=disabled,
            style=me.Style(width="100%"),
        )
