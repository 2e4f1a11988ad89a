"""HTTP request/response contracts and the default transport."""

from .abort import AbortController, AbortSignal
from .client import DefaultHttpClient, HttpClient
from .headers import HttpHeaders
from .response import HttpOperationResponse
from .web_resource import HttpRequestBody, TransferProgressEvent, WebResource

__all__ = [
    "AbortController",
    "AbortSignal",
    "HttpClient",
    "DefaultHttpClient",
    "HttpHeaders",
    "HttpOperationResponse",
    "HttpRequestBody",
    "TransferProgressEvent",
    "WebResource",
]
