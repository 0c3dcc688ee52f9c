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

"""Gemini image edit integration."""

import base64
import functools

from google import genai
from google.genai import types
from pydantic import ValidationError

from common.analytics import get_logger, track_model_call
from common.codec import encode_bytes_to_data_url, strip_data_url
from common.error_handling import GenerationError
from common.utils import format_resolution
from config.default import Default
from config.gemini_image_models import get_gemini_image_model_config
from models.requests import ImageEditRequest

logger = get_logger(__name__)

DEFAULT_OUTPUT_MIME_TYPE = "image/png"


@functools.lru_cache(maxsize=None)
def get_client() -> genai.Client:
    """Returns a shared genai client.

    Vertex AI is used when a project is configured, the Gemini API key
    otherwise.
    """
    cfg = Default()
    if cfg.PROJECT_ID:
        model_config = get_gemini_image_model_config(cfg.GEMINI_IMAGE_GEN_MODEL)
        location = cfg.LOCATION
        if model_config and model_config.requires_global_location:
            location = "global"
        return genai.Client(vertexai=True, project=cfg.PROJECT_ID, location=location)
    return genai.Client(api_key=cfg.GEMINI_API_KEY)


def _extract_image(response) -> tuple[bytes, str]:
    """Returns the first inline image of a generate_content response."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None) if feedback else None
        raise GenerationError(
            f"No image was generated. Reason: {block_reason or 'no candidates returned'}"
        )

    text_parts = []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data and inline_data.data:
                data = inline_data.data
                if isinstance(data, str):
                    data = base64.b64decode(data)
                return data, inline_data.mime_type or DEFAULT_OUTPUT_MIME_TYPE
            if getattr(part, "text", None):
                text_parts.append(part.text)

    # The model sometimes answers with text (e.g. a refusal) instead of an image
    if text_parts:
        raise GenerationError(" ".join(text_parts).strip())
    finish_reason = getattr(candidates[0], "finish_reason", None)
    raise GenerationError(
        f"No image was generated. Reason: {finish_reason or 'empty response'}"
    )


def edit_image(
    source_image: str,
    mime_type: str,
    instruction: str,
    client: genai.Client | None = None,
) -> str:
    """Edits a photo with Gemini and returns the result as a data URL.

    Args:
        source_image: The source photo as a base64 data URL or bare base64.
        mime_type: MIME type of the source photo.
        instruction: The full edit instruction sent to the model.
        client: Optional genai client; the shared client is used when omitted.

    Returns:
        The single generated image as ``data:<mime>;base64,<payload>``.

    Raises:
        GenerationError: If the request is invalid, the call fails, or the
            response holds no image. The underlying message is preserved.
    """
    cfg = Default()
    try:
        request = ImageEditRequest(
            source_image=source_image,
            mime_type=mime_type,
            instruction=instruction,
            model_name=cfg.GEMINI_IMAGE_GEN_MODEL,
        )
        image_bytes = base64.b64decode(strip_data_url(request.source_image))
    except ValidationError as e:
        raise GenerationError(f"Invalid edit request: {e.errors()[0]['msg']}") from e
    except ValueError as e:
        raise GenerationError(f"Invalid source image: {e}") from e

    model_config = get_gemini_image_model_config(request.model_name)
    if model_config and request.mime_type not in model_config.supported_input_mime_types:
        raise GenerationError(
            f"Unsupported image type {request.mime_type} for {model_config.display_name}."
        )

    logger.info(
        f"Editing image ({request.mime_type}, {format_resolution(request.source_image)}) "
        f"with {request.model_name}"
    )

    client = client or get_client()
    try:
        with track_model_call(
            model_name=request.model_name,
            prompt_length=len(request.instruction),
            mime_type=request.mime_type,
        ):
            response = client.models.generate_content(
                model=request.model_name,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=request.mime_type),
                    types.Part.from_text(text=request.instruction),
                ],
                config=types.GenerateContentConfig(
                    response_modalities=(
                        model_config.response_modalities if model_config else ["IMAGE", "TEXT"]
                    ),
                ),
            )
            data, output_mime_type = _extract_image(response)
    except GenerationError:
        raise
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.error(f"Image edit failed: {message}")
        raise GenerationError(message or None) from e

    return encode_bytes_to_data_url(data, output_mime_type)
