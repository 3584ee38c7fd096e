import io
import sys

from loguru import logger

from flashdeck.core.logging import configure_logging


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


def test_configure_logging_respects_level():
    stream = io.StringIO()
    configure_logging("warning", sink=stream)
    try:
        logger.info("hidden message")
        logger.warning("visible message")
    finally:
        configure_logging("INFO", sink=sys.__stderr__)
    out = stream.getvalue()
    assert "visible message" in out
    assert "hidden message" not in out
