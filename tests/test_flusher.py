"""Tests for batching and the periodic flush thread."""

import threading

import pytest
import responses

from logglysend import TransportError
from logglysend.buffer import MessageBuffer
from logglysend.flusher import DEFAULT_FLUSH_INTERVAL, Flusher
from logglysend.sender import TAG_HEADER, BulkSender
from logglysend.tags import TagRegistry

from conftest import ENDPOINT, fail_bulk, wait_for


@pytest.fixture
def parts(bulk):
    lock = threading.Lock()
    buffer = MessageBuffer(lock, size=100)
    tags = TagRegistry(lock)
    flusher = Flusher(buffer, tags, BulkSender(ENDPOINT), interval=60.0)
    yield buffer, tags, flusher
    flusher.stop()


def test_default_interval():
    assert DEFAULT_FLUSH_INTERVAL == 5.0


class TestFlush:
    def test_empty_buffer_makes_no_request(self, bulk, parts):
        _, _, flusher = parts

        assert flusher.flush() is True
        assert len(bulk.calls) == 0

    def test_sends_newline_joined_batch(self, bulk, parts):
        buffer, tags, flusher = parts
        tags.add("a", "b")
        for entry in (b"one", b"two", b"three"):
            buffer.append(entry, "")

        assert flusher.flush() is True

        assert len(bulk.calls) == 1
        assert bulk.calls[0].request.body == b"one\ntwo\nthree"
        assert bulk.calls[0].request.headers[TAG_HEADER] == "a,b"
        assert len(buffer) == 0

    def test_second_flush_is_noop(self, bulk, parts):
        buffer, _, flusher = parts
        buffer.append(b"x", "")

        flusher.flush()
        flusher.flush()

        assert len(bulk.calls) == 1

    def test_rejected_batch_is_dropped(self, bulk, parts):
        bulk.replace(responses.POST, ENDPOINT, status=500, body="oops")
        buffer, _, flusher = parts
        buffer.append(b"x", "")

        assert flusher.flush() is False
        assert len(buffer) == 0

    def test_failed_batch_is_dropped(self, bulk, parts):
        fail_bulk(bulk)
        buffer, _, flusher = parts
        buffer.append(b"x", "")

        with pytest.raises(TransportError):
            flusher.flush()

        assert len(buffer) == 0


class TestTrigger:
    def test_trigger_flushes_in_background(self, bulk, parts):
        buffer, _, flusher = parts
        buffer.append(b"x", "")

        flusher.trigger()

        assert wait_for(lambda: len(bulk.calls) == 1)

    def test_trigger_swallows_transport_error(self, bulk, parts, caplog):
        fail_bulk(bulk)
        buffer, _, flusher = parts
        buffer.append(b"x", "")

        flusher.trigger()

        assert wait_for(lambda: "dropped batch" in caplog.text)


class TestPeriodicFlush:
    def test_flushes_on_interval(self, bulk, parts):
        buffer, _, flusher = parts
        flusher.interval = 0.05
        buffer.append(b"x", "")

        flusher.start()

        assert wait_for(lambda: len(bulk.calls) == 1)
        assert bulk.calls[0].request.body == b"x"

    def test_keeps_running_after_failure(self, bulk, parts):
        fail_bulk(bulk)
        buffer, _, flusher = parts
        flusher.interval = 0.05
        buffer.append(b"x", "")

        flusher.start()

        assert wait_for(lambda: len(bulk.calls) == 1)
        buffer.append(b"y", "")
        assert wait_for(lambda: len(bulk.calls) == 2)
        assert flusher.running

    def test_stop(self, bulk, parts):
        _, _, flusher = parts
        flusher.start()
        assert flusher.running

        flusher.stop()

        assert not flusher.running
        flusher.stop()

    def test_start_is_idempotent(self, bulk, parts):
        _, _, flusher = parts
        flusher.start()
        thread = flusher._flush_thread

        flusher.start()

        assert flusher._flush_thread is thread
