"""
Example of using logglysend with Python's standard logging module.
"""

import logging

from logglysend import LogglyHandler


def main():
    handler = LogglyHandler(
        "your-customer-token",
        tags=("example", "stdlib"),
        buffer_size=5,
        flush_interval=3.0,
        defaults={"environment": "development"},
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("my_app")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    try:
        logger.debug("Debug message")
        logger.info("Info message with extra", extra={"user_id": 42})
        logger.warning("Warning message")

        try:
            raise ValueError("Something went wrong!")
        except ValueError:
            logger.exception("Caught an exception")

    finally:
        handler.close()


if __name__ == "__main__":
    main()
