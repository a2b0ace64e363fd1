# -*- coding: utf-8 -*-
"""
Тесты для scripts/weather/_services/weather_fetcher.py
"""
import asyncio

from core.event_bus import WEATHER_ERROR, WEATHER_LOADING, WEATHER_READY, subscribe_async
from core.models.app_state import FetchPhase, StateStore
from core.utils.api_client import WeatherFetchError
from scripts.weather._services.weather_fetcher import WeatherFetchController
from tests.fakes import PARIS, FakeOpenMeteoClient, make_place, make_snapshot

LONDON_PLACE = make_place()
PARIS_PLACE = make_place(**PARIS)
LONDON_KEY = (LONDON_PLACE.latitude, LONDON_PLACE.longitude)
PARIS_KEY = (PARIS_PLACE.latitude, PARIS_PLACE.longitude)


def make_controller(client):
    return WeatherFetchController(client, StateStore(), chat_id=7)


async def test_successful_fetch():
    snapshot = make_snapshot(temperature=9)
    client = FakeOpenMeteoClient(snapshots={LONDON_KEY: snapshot})
    fetcher = make_controller(client)

    state = await fetcher.fetch(LONDON_PLACE)

    assert client.weather_calls == [LONDON_KEY]
    assert state.fetch_phase is FetchPhase.READY
    assert state.snapshot is snapshot
    assert state.loading is False
    assert state.error == ""
    assert state.selected_place == LONDON_PLACE


async def test_loading_state_while_request_pending():
    client = FakeOpenMeteoClient(snapshots={LONDON_KEY: make_snapshot()},
                                 weather_delays={LONDON_KEY: 0.05})
    fetcher = make_controller(client)

    task = asyncio.create_task(fetcher.fetch(LONDON_PLACE))
    await asyncio.sleep(0.01)
    assert fetcher.store.state.loading is True
    assert fetcher.store.state.fetch_phase is FetchPhase.LOADING
    assert fetcher.store.state.snapshot is None
    await task
    assert fetcher.store.state.loading is False


async def test_failed_fetch_then_success_clears_error():
    client = FakeOpenMeteoClient(
        snapshots={PARIS_KEY: make_snapshot(temperature=15)},
        weather_errors={LONDON_KEY: WeatherFetchError("Failed to fetch weather")},
    )
    fetcher = make_controller(client)

    state = await fetcher.fetch(LONDON_PLACE)
    assert state.snapshot is None
    assert state.error == "Failed to fetch weather"
    assert state.fetch_phase is FetchPhase.ERROR
    assert state.loading is False

    state = await fetcher.fetch(PARIS_PLACE)
    assert state.error == ""
    assert state.snapshot.current.temperature_2m == 15
    assert state.fetch_phase is FetchPhase.READY


async def test_error_without_message_uses_fallback():
    client = FakeOpenMeteoClient(weather_errors={LONDON_KEY: RuntimeError()})
    state = await make_controller(client).fetch(LONDON_PLACE)
    assert state.error == "Something went wrong"


async def test_late_response_for_previous_place_is_discarded():
    client = FakeOpenMeteoClient(
        snapshots={LONDON_KEY: make_snapshot(temperature=1), PARIS_KEY: make_snapshot(temperature=2)},
        weather_delays={LONDON_KEY: 0.1, PARIS_KEY: 0.01},
    )
    fetcher = make_controller(client)

    slow = asyncio.create_task(fetcher.fetch(LONDON_PLACE))
    await asyncio.sleep(0.01)
    await fetcher.fetch(PARIS_PLACE)
    await slow

    state = fetcher.store.state
    assert state.selected_place == PARIS_PLACE
    assert state.snapshot.current.temperature_2m == 2
    assert state.fetch_generation == 2


async def test_late_error_for_previous_place_is_discarded():
    client = FakeOpenMeteoClient(
        snapshots={PARIS_KEY: make_snapshot(temperature=2)},
        weather_delays={LONDON_KEY: 0.1},
        weather_errors={LONDON_KEY: WeatherFetchError("timeout")},
    )
    fetcher = make_controller(client)

    slow = asyncio.create_task(fetcher.fetch(LONDON_PLACE))
    await asyncio.sleep(0.01)
    await fetcher.fetch(PARIS_PLACE)
    await slow

    assert fetcher.store.state.error == ""
    assert fetcher.store.state.fetch_phase is FetchPhase.READY


async def test_events_published():
    client = FakeOpenMeteoClient(
        snapshots={LONDON_KEY: make_snapshot()},
        weather_errors={PARIS_KEY: WeatherFetchError("Failed to fetch weather")},
    )
    fetcher = make_controller(client)
    events = []

    async def handler(event):
        events.append((event["chat_id"], event["state"].fetch_phase))

    for event_type in (WEATHER_LOADING, WEATHER_READY, WEATHER_ERROR):
        subscribe_async(event_type, handler)

    await fetcher.fetch(LONDON_PLACE)
    await fetcher.fetch(PARIS_PLACE)

    assert events == [
        (7, FetchPhase.LOADING),
        (7, FetchPhase.READY),
        (7, FetchPhase.LOADING),
        (7, FetchPhase.ERROR),
    ]
