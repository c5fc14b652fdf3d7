from __future__ import annotations

import json
import logging
import random
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .config import ClientConfig
from .errors import EncodeError
from .request import (
    UpdateSpec,
    build_delete_item,
    build_get_item,
    build_put_item,
    build_update_item,
)
from .response import decode_response
from .retry import RetryExecutor
from .transport import BotocoreTransport, Transport
from .types import DeleteOptions, GetOptions, Operation, PutOptions, UpdateOptions

logger = logging.getLogger(__name__)

type ItemPairs = list[tuple[str, Any]]


def serialize_request(req: Mapping[str, Any]) -> bytes:
    try:
        return json.dumps(req, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as err:
        raise EncodeError("request body is not encodable as UTF-8") from err


class Client:
    def __init__(
        self,
        *,
        transport: Transport | None = None,
        config: ClientConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport: Transport = transport or BotocoreTransport.from_config(self._config)
        self._executor = RetryExecutor(self._transport, self._config.retry, sleep=sleep, rand=rand)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def get_item(self, table_name: str, key: Any, options: GetOptions | None = None) -> ItemPairs:
        return self._call(Operation.GET_ITEM, build_get_item(table_name, key, options))

    def put_item(
        self,
        table_name: str,
        item: Mapping[str, Any] | Sequence[tuple[str, Any]],
        options: PutOptions | None = None,
    ) -> ItemPairs:
        return self._call(Operation.PUT_ITEM, build_put_item(table_name, item, options))

    def delete_item(self, table_name: str, key: Any, options: DeleteOptions | None = None) -> ItemPairs:
        return self._call(Operation.DELETE_ITEM, build_delete_item(table_name, key, options))

    def update_item(
        self,
        table_name: str,
        key: Any,
        updates: Sequence[UpdateSpec],
        options: UpdateOptions | None = None,
    ) -> ItemPairs:
        return self._call(Operation.UPDATE_ITEM, build_update_item(table_name, key, updates, options))

    def _call(self, operation: Operation, req: dict[str, Any]) -> ItemPairs:
        logger.debug("%s on table %s", operation, req["TableName"])
        body = self._executor.execute(operation, serialize_request(req))
        return decode_response(operation, body)
