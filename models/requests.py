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

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ImageEditRequest(BaseModel):
    """
    Defines the contract for a single image edit request.
    The workflow builds one of these per generation and the model layer
    consumes it.
    """

    source_image: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)
    instruction: str
    model_name: Optional[str] = None

    @field_validator("instruction")
    @classmethod
    def instruction_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("instruction must not be blank")
        return value


class ResultUploadRequest(BaseModel):
    """A generated image to forward to the collection endpoint."""

    result_image: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1)
    endpoint_url: str = Field(..., min_length=1)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
