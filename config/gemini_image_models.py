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

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GeminiImageModelConfig:
    """Configuration for a Gemini model that can edit an input photo."""

    version_id: str  # Short ID (e.g., "2.5-flash")
    model_name: str  # Full API Model ID (e.g., "gemini-2.5-flash-image")
    display_name: str  # Shown in the page header

    # Vertex AI serves some preview models only from the global endpoint
    requires_global_location: bool = False

    supported_input_mime_types: List[str] = field(
        default_factory=lambda: ["image/png", "image/jpeg", "image/webp"]
    )
    response_modalities: List[str] = field(
        default_factory=lambda: ["IMAGE", "TEXT"]
    )


# Single source of truth
GEMINI_IMAGE_MODELS: List[GeminiImageModelConfig] = [
    GeminiImageModelConfig(
        version_id="2.5-flash",
        model_name="gemini-2.5-flash-image",
        display_name="Gemini 2.5 Flash Image",
    ),
    GeminiImageModelConfig(
        version_id="3.0-pro-preview",
        model_name="gemini-3-pro-image-preview",
        display_name="Gemini 3.0 Pro Image Preview",
        requires_global_location=True,
        supported_input_mime_types=[
            "image/png",
            "image/jpeg",
            "image/webp",
            "image/heic",
            "image/heif",
        ],
    ),
]


def get_gemini_image_model_config(
    model_name_or_version: str,
) -> Optional[GeminiImageModelConfig]:
    """Finds config by either full model name or short version ID."""
    for model in GEMINI_IMAGE_MODELS:
        if (
            model.model_name == model_name_or_version
            or model.version_id == model_name_or_version
        ):
            return model
    return None
