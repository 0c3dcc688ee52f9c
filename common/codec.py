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

"""Conversions between uploaded files, base64 data URLs and raw bytes."""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from typing import Any

from common.error_handling import DataUrlFormatError, ImageReadError

DEFAULT_MIME_TYPE = "application/octet-stream"

# data:<mime>;base64,<payload>
DATA_URL_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)


def guess_mime_type(file: Any) -> str:
    """Returns the declared MIME type of a file-like object.

    Mesop's UploadedFile carries `mime_type`; plain files fall back to a
    guess from their name.
    """
    mime_type = getattr(file, "mime_type", None)
    if mime_type:
        return mime_type
    name = getattr(file, "name", None)
    if isinstance(name, str):
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


def _read_all(file: Any) -> bytes:
    if hasattr(file, "getvalue"):
        contents = file.getvalue()
    else:
        if hasattr(file, "seek"):
            file.seek(0)
        contents = file.read()
    if isinstance(contents, bytearray):
        contents = bytes(contents)
    if not isinstance(contents, bytes):
        raise ImageReadError(
            f"Expected binary file contents, got {type(contents).__name__}"
        )
    return contents


def encode_bytes_to_data_url(data: bytes, mime_type: str) -> str:
    """Encodes raw bytes as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def encode_file_to_base64(file: Any) -> str:
    """Reads a file-like object and returns its content as a base64 data URL.

    Args:
        file: An uploaded file, BytesIO or binary file handle.

    Returns:
        A string of the form ``data:<mime>;base64,<payload>``.

    Raises:
        ImageReadError: If the file cannot be read.
    """
    try:
        contents = _read_all(file)
    except ImageReadError:
        raise
    except (OSError, ValueError, AttributeError) as e:
        raise ImageReadError(f"Failed to read file: {e}") from e
    return encode_bytes_to_data_url(contents, guess_mime_type(file))


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """Parses a base64 data URL into its MIME type and binary payload.

    Raises:
        DataUrlFormatError: If the string is not a well-formed data URL or the
            payload is not valid base64.
    """
    if not isinstance(data_url, str):
        raise DataUrlFormatError("Invalid base64 data URL")
    match = DATA_URL_PATTERN.match(data_url)
    if not match:
        raise DataUrlFormatError("Invalid base64 data URL")

    mime_type, payload = match.group(1), match.group(2)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DataUrlFormatError(f"Invalid base64 payload: {e}") from e
    return mime_type, data


def strip_data_url(data_url: str) -> str:
    """Returns only the base64 payload of a data URL, or the input unchanged."""
    match = DATA_URL_PATTERN.match(data_url)
    if match:
        return match.group(2)
    return data_url
