"""Proxy response domain exports."""

from http import HTTPStatus

from .response_codec import dumps_proxy_response, encode_proxy_response
from .response_models import (
    APPLICATION_JSON,
    TEXT_PLAIN,
    HeaderMap,
    ProxyBody,
    ProxyResponse,
    response,
)

__all__ = [
    "HTTPStatus",
    "dumps_proxy_response",
    "encode_proxy_response",
    "APPLICATION_JSON",
    "TEXT_PLAIN",
    "HeaderMap",
    "ProxyBody",
    "ProxyResponse",
    "response",
]
