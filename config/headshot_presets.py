CUSTOM_STYLE_ID = "custom"
DEFAULT_STYLE_ID = "corporate-grey"

# Used when a style id no longer matches any preset
FALLBACK_PROMPT = "Professional headshot."

PRESET_STYLES = [
    {
        "key": "corporate-grey",
        "label": "Corporate Grey",
        "description": "Classic studio headshot on a neutral grey backdrop.",
        "prompt": "Transform this photo into a professional corporate headshot. The person wears a tailored dark business suit with a crisp white shirt. Use a smooth, evenly lit neutral grey studio backdrop and soft, flattering key lighting.",
    },
    {
        "key": "tech-office",
        "label": "Modern Tech Office",
        "description": "Smart casual look in a bright, blurred open-plan office.",
        "prompt": "Transform this photo into a modern tech startup headshot. The person wears smart casual clothing such as a quality knit sweater or an open-collar shirt. The background is a bright, modern open-plan office with glass walls and plants, softly blurred with shallow depth of field.",
    },
    {
        "key": "outdoor-natural",
        "label": "Outdoor Natural Light",
        "description": "Warm golden-hour portrait with greenery behind.",
        "prompt": "Transform this photo into an outdoor professional portrait taken during golden hour. The person wears a smart casual blazer. The background is lush green foliage in a park, heavily blurred with warm, natural sunlight and gentle rim lighting on the hair.",
    },
    {
        "key": "studio-black",
        "label": "Dramatic Studio Black",
        "description": "Low-key lighting on a deep black background.",
        "prompt": "Transform this photo into a dramatic low-key studio headshot. The person wears a black turtleneck. Use a deep black background with a single soft key light from the side, creating elegant shadows and a confident, editorial look.",
    },
    {
        "key": "creative-color",
        "label": "Creative Color Pop",
        "description": "Vibrant solid-color backdrop for creative profiles.",
        "prompt": "Transform this photo into a vibrant creative-industry headshot. The person wears stylish contemporary clothing. The background is a bold, solid pastel teal studio backdrop with bright, even, high-key lighting and a friendly, approachable mood.",
    },
    {
        "key": "medical-professional",
        "label": "Medical Professional",
        "description": "Clean clinical look with a white coat.",
        "prompt": "Transform this photo into a headshot of a medical professional. The person wears a clean white lab coat over a light blue shirt, with a stethoscope around the neck. The background is a bright, softly blurred modern clinic.",
    },
]


def get_preset(style_id: str) -> dict | None:
    """Returns the preset with the given key, or None."""
    return next((p for p in PRESET_STYLES if p["key"] == style_id), None)


def get_preset_prompt(style_id: str) -> str:
    preset = get_preset(style_id)
    return preset["prompt"] if preset else FALLBACK_PROMPT
