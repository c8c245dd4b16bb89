import asyncio
import json

from drivegate.events import KEEPALIVE_FRAME, KeepAliveStream, initialized_frame


def _disconnect_after(checks: int):
    """is_disconnected stand-in that reports a disconnect on the given check."""
    calls = {"n": 0}

    async def is_disconnected() -> bool:
        calls["n"] += 1
        return calls["n"] >= checks

    return is_disconnected


def _collect(stream: KeepAliveStream, limit: int = 10) -> list[str]:
    async def run():
        frames = []
        async for frame in stream.frames():
            frames.append(frame)
            if len(frames) >= limit:
                break
        return frames

    return asyncio.run(run())


class TestInitializedFrame:
    def test_is_sse_data_frame(self):
        frame = initialized_frame()
        assert frame.startswith("data: ")
        assert frame.endswith("\n\n")

    def test_payload(self):
        payload = json.loads(initialized_frame()[len("data: "):])
        assert payload == {
            "jsonrpc": "2.0",
            "method": "initialized",
            "params": {"protocolVersion": "2024-11-05"},
        }


class TestKeepAliveStream:
    def test_first_frame_is_sent_immediately(self):
        stream = KeepAliveStream(0, _disconnect_after(1))
        assert _collect(stream) == [initialized_frame()]
        assert stream.ticks == 0

    def test_one_interval_yields_exactly_one_keepalive(self):
        stream = KeepAliveStream(0, _disconnect_after(2))
        frames = _collect(stream)
        assert frames == [initialized_frame(), KEEPALIVE_FRAME]
        assert stream.ticks == 1

    def test_disconnect_stops_ticking(self):
        stream = KeepAliveStream(0, _disconnect_after(4))
        frames = _collect(stream)
        assert frames.count(KEEPALIVE_FRAME) == 3
        assert stream.closed

    def test_keepalive_is_comment_frame(self):
        assert KEEPALIVE_FRAME == ": ping\n\n"

    def test_closed_when_consumer_goes_away(self):
        stream = KeepAliveStream(0, _disconnect_after(1000))

        async def run():
            gen = stream.frames()
            await gen.__anext__()
            await gen.__anext__()
            await gen.aclose()

        asyncio.run(run())
        assert stream.opened
        assert stream.closed
        assert stream.ticks == 1

    def test_cancellation_closes_stream(self):
        stream = KeepAliveStream(60, _disconnect_after(1000))

        async def run():
            async def consume():
                async for _ in stream.frames():
                    pass

            task = asyncio.create_task(consume())
            await asyncio.sleep(0.01)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        asyncio.run(run())
        assert stream.closed
        assert stream.ticks == 0

    def test_waits_for_interval_between_ticks(self, mocker):
        sleep = mocker.patch("drivegate.events.asyncio.sleep", new=mocker.AsyncMock())
        stream = KeepAliveStream(30, _disconnect_after(2))
        _collect(stream)
        sleep.assert_awaited_with(30)
        assert sleep.await_count == 2
