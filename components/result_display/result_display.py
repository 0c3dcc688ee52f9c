"""Side-by-side view of the original photo and the generated headshot."""

from collections.abc import Callable

import mesop as me

IMAGE_STYLE = me.Style(
    width="100%",
    max_width=420,
    border_radius=12,
    object_fit="contain",
)


@me.component
def result_display(original_image: str, generated_image: str, on_reset: Callable):
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            flex_wrap="wrap",
            gap=24,
            justify_content="center",
        )
    ):
        with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
            me.text("Original", type="subtitle-2")
            me.image(src=original_image, style=IMAGE_STYLE)
        with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
            me.text("Generated", type="subtitle-2")
            me.image(src=generated_image, style=IMAGE_STYLE)

    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            gap=16,
            justify_content="center",
            margin=me.Margin(top=16),
        )
    ):
        me.button("Try another style", on_click=on_reset, type="stroked")
