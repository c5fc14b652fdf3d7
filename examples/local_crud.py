from __future__ import annotations

import logging
import os

from wiredb_py import AttributeUpdate, Client, ClientConfig, ConditionFailedError, PutOptions, UpdateOptions
from wiredb_py.transport import BotocoreTransport


def _client() -> Client:
    os.environ.setdefault("DYNAMODB_ENDPOINT", "http://localhost:8000")
    config = ClientConfig.from_env()
    return Client(transport=BotocoreTransport.from_config(config), config=config)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    client = _client()
    table_name = os.environ.get("WIREDB_TABLE", "users")

    client.put_item(table_name, [("user", "Riley"), ("time", 300), ("feeling", "surprised")])

    try:
        client.put_item(
            table_name,
            [("user", "Riley"), ("time", 300), ("feeling", "calm")],
            PutOptions(expected=("feeling", "not surprised")),
        )
    except ConditionFailedError as err:
        print("conditional put rejected:", err.code)

    updated = client.update_item(
        table_name,
        ("Riley", 300),
        [AttributeUpdate.add("logins", 1), AttributeUpdate.put("status", "online")],
        UpdateOptions(return_values="all_new"),
    )
    print("update:", updated)
    print("get:", client.get_item(table_name, ("Riley", 300)))


if __name__ == "__main__":
    main()
