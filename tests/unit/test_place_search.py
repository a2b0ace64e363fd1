# -*- coding: utf-8 -*-
"""
Тесты для scripts/weather/_services/place_search.py
Debounce, отмена устаревших запросов, мягкая обработка ошибок.
"""
import asyncio

from core.event_bus import SUGGESTIONS_UPDATED, subscribe_async
from core.models.app_state import SearchPhase, StateStore
from core.utils.api_client import GeocodingError
from scripts.weather._services.place_search import PlaceSearchController
from tests.fakes import FakeOpenMeteoClient, make_place

FAST = 0.02


def make_controller(client, debounce=FAST):
    return PlaceSearchController(client, StateStore(), debounce_sec=debounce, chat_id=42)


async def test_empty_query_issues_no_request():
    client = FakeOpenMeteoClient(places={"Lon": [make_place()]})
    search = make_controller(client)

    search.update_query("Lon")
    await search.wait_settled()
    assert len(search.store.state.suggestions) == 1

    search.update_query("")
    assert search.store.state.suggestions == ()
    assert search.phase is SearchPhase.IDLE
    await asyncio.sleep(FAST * 3)
    assert client.search_calls == ["Lon"]


async def test_burst_is_coalesced_into_one_request():
    client = FakeOpenMeteoClient(places={"London": [make_place()]})
    search = make_controller(client, debounce=0.3)

    search.update_query("Lon")
    await asyncio.sleep(0.1)
    search.update_query("London")
    assert search.phase is SearchPhase.DEBOUNCING

    await search.wait_settled()
    assert client.search_calls == ["London"]
    assert [p.name for p in search.store.state.suggestions] == ["London"]
    assert search.phase is SearchPhase.SETTLED


async def test_new_query_cancels_request_in_flight():
    client = FakeOpenMeteoClient(
        places={"Par": [make_place(id=1, name="Parma")], "Paris": [make_place(id=2, name="Paris")]},
        search_delay=0.1,
    )
    search = make_controller(client)

    search.update_query("Par")
    await asyncio.sleep(FAST * 3)
    assert search.phase is SearchPhase.IN_FLIGHT

    search.update_query("Paris")
    await search.wait_settled()

    assert client.cancelled_searches == ["Par"]
    assert [p.name for p in search.store.state.suggestions] == ["Paris"]


async def test_cancelled_lookup_changes_nothing():
    client = FakeOpenMeteoClient(places={"Lon": [make_place()]}, search_delay=0.1)
    search = make_controller(client)
    events = []

    async def handler(event):
        events.append(event)

    subscribe_async(SUGGESTIONS_UPDATED, handler)

    search.update_query("Lon")
    await asyncio.sleep(FAST * 3)
    before = search.store.state
    search.cancel()
    await asyncio.sleep(0.15)

    assert client.cancelled_searches == ["Lon"]
    assert search.store.state is before
    assert search.store.state.error == ""
    assert events == []


async def test_lookup_failure_is_soft(caplog):
    client = FakeOpenMeteoClient(places={"Lon": [make_place()]})
    search = make_controller(client)
    search.update_query("Lon")
    await search.wait_settled()

    client.search_error = GeocodingError("Failed to fetch suggestions")
    search.update_query("Lond")
    await search.wait_settled()

    state = search.store.state
    assert search.phase is SearchPhase.FAILED
    assert [p.name for p in state.suggestions] == ["London"]
    assert state.error == ""
    assert "Ошибка поиска мест" in caplog.text


async def test_suggestions_event_published():
    client = FakeOpenMeteoClient(places={"Lon": [make_place(id=i) for i in range(3)]})
    search = make_controller(client)
    events = []

    async def handler(event):
        events.append(event)

    subscribe_async(SUGGESTIONS_UPDATED, handler)
    search.update_query("Lon")
    await search.wait_settled()

    assert len(events) == 1
    assert events[0]["chat_id"] == 42
    assert events[0]["query"] == "Lon"
    assert len(events[0]["suggestions"]) == 3


async def test_select_returns_place_and_stops_search():
    client = FakeOpenMeteoClient(places={"Lon": [make_place(id=1), make_place(id=2)]})
    search = make_controller(client)
    search.update_query("Lon")
    await search.wait_settled()

    assert search.select(1).id == 2
    assert search.select(5) is None
