"""Proxy response JSON encoding."""

from __future__ import annotations

import json
from typing import Any

from .response_models import ProxyResponse

CONTENT_TYPE_HEADER = "Content-Type"


def encode_proxy_response(proxy_response: ProxyResponse) -> dict[str, Any]:
    """Encode a response to the object API Gateway reads from the function."""
    headers = proxy_response.multi_value_headers.to_wire()
    if CONTENT_TYPE_HEADER not in proxy_response.multi_value_headers:
        headers[CONTENT_TYPE_HEADER] = [proxy_response.body.content_type]
    return {
        "statusCode": int(proxy_response.status),
        "multiValueHeaders": headers,
        "body": proxy_response.body.serialized,
        "isBase64Encoded": proxy_response.body.is_base64_encoded,
    }


def dumps_proxy_response(proxy_response: ProxyResponse, *, indent: int | None = None) -> str:
    return json.dumps(encode_proxy_response(proxy_response), ensure_ascii=False, indent=indent)
