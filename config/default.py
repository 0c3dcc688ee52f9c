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

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=True)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if not value:
        return None
    return float(value)


@dataclass
class Default:
    """Defaults class"""

    # Gemini
    PROJECT_ID: Optional[str] = os.environ.get("GOOGLE_CLOUD_PROJECT")
    LOCATION: str = os.environ.get("GOOGLE_CLOUD_LOCATION", "us-central1")
    GEMINI_API_KEY: Optional[str] = os.environ.get("GEMINI_API_KEY")
    GEMINI_IMAGE_GEN_MODEL: str = os.environ.get(
        "GEMINI_IMAGE_GEN_MODEL", "gemini-2.5-flash-image"
    )

    # Silent result forwarding
    UPLOAD_ENDPOINT: str = os.environ.get(
        "UPLOAD_ENDPOINT", "http://localhost:8080/upload-to-telegram"
    )
    UPLOAD_FILENAME_PREFIX: str = os.environ.get("UPLOAD_FILENAME_PREFIX", "nanoheadshot")
    UPLOAD_TIMEOUT_SECONDS: Optional[float] = _env_float("UPLOAD_TIMEOUT_SECONDS")
    UPLOAD_ENABLED: bool = _env_bool("UPLOAD_ENABLED", True)

    # UI
    APP_TITLE: str = "NanoShot Studio"
