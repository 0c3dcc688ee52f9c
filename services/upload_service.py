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

import concurrent.futures
import time
from typing import Any, Optional

import requests

from common.analytics import get_logger, log_result_upload
from common.codec import decode_data_url
from common.error_handling import UploadServerError, UploadTransportError
from config.default import Default
from models.requests import ResultUploadRequest

logger = get_logger(__name__)

# Background uploads never block the page; nothing joins these futures
_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=2, thread_name_prefix="result-upload"
)


def make_result_filename(prefix: Optional[str] = None, now: Optional[float] = None) -> str:
    """Returns `<prefix>_<epoch millis>.png`."""
    prefix = prefix or Default().UPLOAD_FILENAME_PREFIX
    timestamp_ms = int((now if now is not None else time.time()) * 1000)
    return f"{prefix}_{timestamp_ms}.png"


def forward_result(
    result_image: str,
    filename: str,
    endpoint_url: str,
    timeout: Optional[float] = None,
) -> Any:
    """
    Posts a generated image to the collection endpoint as multipart/form-data.

    Args:
        result_image: The generated image as a base64 data URL.
        filename: Name given to the `file` form field.
        endpoint_url: The collection endpoint.
        timeout: Optional transport timeout in seconds.

    Returns:
        The JSON body returned by the endpoint.

    Raises:
        DataUrlFormatError: If `result_image` is not a data URL.
        UploadTransportError: If the request cannot complete.
        UploadServerError: If the endpoint answers with a failure status.
    """
    request = ResultUploadRequest(
        result_image=result_image,
        filename=filename,
        endpoint_url=endpoint_url,
        timeout_seconds=timeout,
    )
    mime_type, data = decode_data_url(request.result_image)

    files = {"file": (request.filename, data, mime_type)}
    try:
        response = requests.post(
            request.endpoint_url, files=files, timeout=request.timeout_seconds
        )
    except requests.RequestException as e:
        raise UploadTransportError(f"Upload request failed: {e}") from e

    if not response.ok:
        raise UploadServerError(response.status_code, response.text or response.reason or "")

    return response.json()


def _forward_silently(result_image: str, filename: str, endpoint_url: str, timeout: Optional[float]):
    """Runs an upload, logging instead of raising on failure."""
    try:
        body = forward_result(result_image, filename, endpoint_url, timeout=timeout)
    except Exception as e:
        logger.error(f"Silent upload error: {e}")
        log_result_upload(filename, endpoint_url, status="failure", details={"error": str(e)})
        return None
    log_result_upload(filename, endpoint_url, status="success")
    return body


def forward_result_in_background(
    result_image: str,
    filename: str,
    endpoint_url: Optional[str] = None,
) -> Optional[concurrent.futures.Future]:
    """
    Schedules a fire-and-forget upload of a generated image.
    Failures only produce a log entry. The returned future always resolves
    without raising.
    """
    cfg = Default()
    if not cfg.UPLOAD_ENABLED:
        logger.info(f"Result upload disabled, skipping {filename}")
        return None
    endpoint_url = endpoint_url or cfg.UPLOAD_ENDPOINT
    return _executor.submit(
        _forward_silently,
        result_image,
        filename,
        endpoint_url,
        cfg.UPLOAD_TIMEOUT_SECONDS,
    )
