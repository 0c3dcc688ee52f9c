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

import logging
from typing import Optional

# Dedicated logger for tracking the suppressed error
race_condition_logger = logging.getLogger("nanoshot.race_condition_tracker")

GENERIC_GENERATION_ERROR = (
    "Something went wrong while generating the image. Please try again."
)


class GenerationError(Exception):
    """Custom exception for image edit errors."""

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(message or "")

    def user_message(self, fallback: str = GENERIC_GENERATION_ERROR) -> str:
        return self.message or fallback


class PromptValidationError(GenerationError):
    """Raised before any model call when the chosen prompt is unusable."""


class ImageReadError(ValueError):
    """Raised when a selected file cannot be read."""


class DataUrlFormatError(ValueError):
    """Raised when a string is not a well-formed base64 data URL."""


class UploadError(Exception):
    """Base class for failures while forwarding a generated image."""


class UploadTransportError(UploadError):
    """The upload request could not complete."""


class UploadServerError(UploadError):
    """The upload endpoint answered with a non-success status."""

    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text
        super().__init__(f"Upload failed: {status_code} {text}")


def describe_error(error: BaseException, fallback: str = GENERIC_GENERATION_ERROR) -> str:
    """Returns the message carried by an error, or the fallback when it has none."""
    if isinstance(error, GenerationError):
        return error.user_message(fallback)
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or fallback


class UnknownHandlerIdFilter(logging.Filter):
    """A logging filter to suppress 'Unknown handler id' errors."""
    def filter(self, record):
        # Benign Mesop message emitted when a handler fires after a re-render
        if "Unknown handler id" in record.getMessage():
            race_condition_logger.info("Suppressed 'Unknown handler id' error", extra={"original_record": record.getMessage()})
            return False
        return True
