# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from common.codec import strip_data_url

logger = logging.getLogger(__name__)


def get_image_dimensions_from_base64(base64_string: str) -> tuple[int, int] | None:
    """Retrieves the width and height of an image from a base64 encoded string.

    Args:
        base64_string: The base64 encoded image data, with or without a data
            URL prefix.

    Returns:
        A tuple (width, height) if successful, or None if the payload is not a
        readable image.
    """
    try:
        image_data = base64.b64decode(strip_data_url(base64_string))
        with Image.open(io.BytesIO(image_data)) as img:
            return img.size
    except (binascii.Error, ValueError, UnidentifiedImageError, OSError) as e:
        logger.info(f"App: Error getting image dimensions: {e}")
        return None


def format_resolution(base64_string: str) -> str:
    """Returns "WIDTHxHEIGHT" for a base64 image, or "Unknown"."""
    dimensions = get_image_dimensions_from_base64(base64_string)
    if not dimensions:
        return "Unknown"
    return f"{dimensions[0]}x{dimensions[1]}"
