"""
Example of configuring a client from LOGGLY_* environment variables.

    LOGGLY_TOKEN=... LOGGLY_TAGS=web,prod python examples/from_environment.py
"""

from logglysend import Client, load_config


def main():
    with Client.from_config(load_config()) as client:
        client.info("Application started")

        for i in range(20):
            client.send({"event": "tick", "n": i})

        client.info("Application finished successfully")

    # Remaining messages were flushed on exit
    print("Done!")


if __name__ == "__main__":
    main()
