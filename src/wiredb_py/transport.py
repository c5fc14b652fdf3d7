from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import boto3
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError
from botocore.httpsession import URLLib3Session

from .errors import TransportError

if TYPE_CHECKING:
    from .config import ClientConfig

TARGET_PREFIX = "DynamoDB_20111205"
CONTENT_TYPE = "application/x-amz-json-1.0"
SERVICE_NAME = "dynamodb"


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: bytes


class Transport(Protocol):
    def send(self, operation: str, body: bytes) -> HttpResponse: ...


class BotocoreTransport:
    def __init__(
        self,
        *,
        region: str,
        endpoint_url: str | None = None,
        credentials: Any | None = None,
        session: Any | None = None,
        http_session: Any | None = None,
        connect_timeout: float = 1.0,
        read_timeout: float = 3.0,
    ) -> None:
        if not region:
            raise ValueError("region is required")

        self._region = region
        self._endpoint_url = endpoint_url or f"https://{SERVICE_NAME}.{region}.amazonaws.com/"

        if credentials is None:
            sess = session or boto3.session.Session(region_name=region)
            credentials = sess.get_credentials()
        if credentials is None:
            raise ValueError("no AWS credentials available")
        self._credentials = credentials

        self._http: Any = http_session or URLLib3Session(timeout=(connect_timeout, read_timeout))

    @staticmethod
    def from_config(config: ClientConfig, **kwargs: Any) -> BotocoreTransport:
        return BotocoreTransport(
            region=config.region,
            endpoint_url=config.endpoint_url,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            **kwargs,
        )

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def _signed_request(self, operation: str, body: bytes) -> AWSRequest:
        request = AWSRequest(
            method="POST",
            url=self._endpoint_url,
            data=body,
            headers={
                "Content-Type": CONTENT_TYPE,
                "X-Amz-Target": f"{TARGET_PREFIX}.{operation}",
            },
        )
        frozen = self._credentials.get_frozen_credentials()
        SigV4Auth(frozen, SERVICE_NAME, self._region).add_auth(request)
        return request

    def send(self, operation: str, body: bytes) -> HttpResponse:
        request = self._signed_request(operation, body)
        try:
            resp = self._http.send(request.prepare())
        except BotoCoreError as err:
            raise TransportError(f"{operation}: {err}") from err
        return HttpResponse(status=int(resp.status_code), body=bytes(resp.content or b""))
