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

import io
import os
import sys

import pytest
from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


class FakeUpload(io.BytesIO):
    """Stands in for Mesop's UploadedFile: bytes plus a name and MIME type."""

    def __init__(self, contents: bytes, name: str, mime_type: str):
        super().__init__(contents)
        self.name = name
        self.mime_type = mime_type


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (1, 1), color=(128, 128, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_upload(png_bytes) -> FakeUpload:
    return FakeUpload(png_bytes, name="selfie.png", mime_type="image/png")
