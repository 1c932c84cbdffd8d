"""Unit tests for the broadcast channels."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import pytest
from ringcam.utils.channels import Channel, ReplayChannel


class TestChannel:
    def test_only_later_emissions_are_delivered(self):
        channel = Channel()
        channel.emit("before")
        received = []
        channel.subscribe(received.append)
        channel.emit("a")
        channel.emit("b")
        assert received == ["a", "b"]

    def test_unsubscribe_stops_delivery(self):
        channel = Channel()
        received = []
        subscription = channel.subscribe(received.append)
        channel.emit(1)
        subscription.unsubscribe()
        subscription.unsubscribe()
        channel.emit(2)
        assert received == [1]
        assert channel.subscriber_count == 0

    def test_failing_listener_does_not_block_others(self):
        channel = Channel()
        received = []

        def broken(_):
            raise RuntimeError("boom")

        channel.subscribe(broken)
        channel.subscribe(received.append)
        channel.emit("x")
        assert received == ["x"]

    @pytest.mark.asyncio
    async def test_next_matching_consumes_first_match_only(self):
        channel = Channel()
        future = channel.next_matching(lambda v: v % 2 == 0)
        channel.emit(1)
        assert not future.done()
        channel.emit(4)
        channel.emit(6)
        assert await future == 4
        await asyncio.sleep(0)
        assert channel.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_next_matching_releases_listener(self):
        channel = Channel()
        future = channel.next_matching()
        future.cancel()
        await asyncio.sleep(0)
        assert channel.subscriber_count == 0


class TestReplayChannel:
    def test_late_subscriber_receives_latest_value(self):
        channel = ReplayChannel("seed")
        channel.emit("latest")
        received = []
        channel.subscribe(received.append)
        assert received == ["latest"]
        channel.emit("next")
        assert received == ["latest", "next"]

    def test_distinct_drops_equal_values(self):
        channel = ReplayChannel(55, distinct=True)
        received = []
        channel.subscribe(received.append)
        assert channel.emit(55.0) is False
        assert channel.emit(40) is True
        assert channel.emit(40) is False
        assert received == [55, 40]

    def test_non_distinct_repeats_equal_values(self):
        channel = ReplayChannel(0)
        received = []
        channel.subscribe(received.append)
        channel.emit(0)
        assert received == [0, 0]
