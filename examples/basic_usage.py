"""
Basic usage example for logglysend.
"""

import sys

from logglysend import Client, LogLevel, TransportError


def main():
    client = Client(
        "your-customer-token",
        "example", "development",   # Tags for every batch
        level=LogLevel.DEBUG,
        buffer_size=10,             # Send after 10 messages
        flush_interval=5.0,         # Or every 5 seconds
        defaults={"environment": "development", "version": "1.0.0"},
        writer=sys.stdout,          # Echo everything locally
    )

    try:
        client.send({"event": "startup", "pid": 1234})
        client.info("Configuration loaded", extra={"config_file": "config.yaml"})
        client.warning("High memory usage detected", extra={"memory_percent": 85})

        for i in range(15):
            client.info(f"Processing item {i}", extra={"item_id": i})

        client.write(b"a raw line, sent as-is")

        print(f"Pending messages: {client.pending_count()}")

        try:
            client.flush()
        except TransportError as exc:
            print(f"Batch dropped: {exc}")

    finally:
        client.close()


if __name__ == "__main__":
    main()
