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

import pytest

from common.codec import (
    decode_data_url,
    encode_file_to_base64,
    strip_data_url,
)
from common.error_handling import DataUrlFormatError, ImageReadError


def test_encode_then_decode_preserves_bytes_and_mime(png_upload, png_bytes):
    data_url = encode_file_to_base64(png_upload)

    assert data_url.startswith("data:image/png;base64,")
    mime_type, data = decode_data_url(data_url)
    assert mime_type == "image/png"
    assert data == png_bytes


def test_encode_guesses_mime_from_file_name(tmp_path, png_bytes):
    path = tmp_path / "portrait.jpg"
    path.write_bytes(png_bytes)

    with open(path, "rb") as f:
        data_url = encode_file_to_base64(f)

    assert data_url.startswith("data:image/jpeg;base64,")


def test_encode_unknown_type_falls_back_to_octet_stream():
    data_url = encode_file_to_base64(io.BytesIO(b"abc"))
    assert data_url == "data:application/octet-stream;base64,YWJj"


def test_encode_closed_file_raises_read_error(png_bytes):
    f = io.BytesIO(png_bytes)
    f.close()
    with pytest.raises(ImageReadError):
        encode_file_to_base64(f)


def test_encode_text_file_raises_read_error():
    with pytest.raises(ImageReadError):
        encode_file_to_base64(io.StringIO("not binary"))


@pytest.mark.parametrize(
    "data_url",
    [
        "",
        "hello world",
        "image/png;base64,AAAA",
        "data:image/png,AAAA",
        "data:;base64,AAAA",
        "data:image/png;base64,",
        "data:image/png;base64,@@@@",
        "data:image/png;base64,AAA",
    ],
)
def test_decode_rejects_malformed_data_urls(data_url):
    with pytest.raises(DataUrlFormatError):
        decode_data_url(data_url)


def test_decode_rejects_non_string():
    with pytest.raises(DataUrlFormatError):
        decode_data_url(None)


def test_decode_valid_data_url():
    assert decode_data_url("data:image/png;base64,AAAA") == ("image/png", b"\x00\x00\x00")


def test_strip_data_url():
    assert strip_data_url("data:image/webp;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"
