"""Tests for inbound message parsing, validation and routing."""

import json

import pytest

from pixelroom.dispatcher import to_int, to_text

from conftest import FakeSocket, drain


def frame(kind, data):
    return json.dumps({"type": kind, "data": data})


def update(display=0, x=1, y=2, value=1):
    return frame("UPDATE", {"display": display, "pixel": {"x": x, "y": y}, "value": value})


@pytest.mark.parametrize("raw, expected", [
    (3, 3),
    (-2, -2),
    (2.9, 2),
    ("7", 7),
    (" 12px", 12),
    ("-1", -1),
    ("abc", None),
    ("", None),
    (None, None),
    (True, None),
    ([1], None),
    ({"x": 1}, None),
    (float("nan"), None),
    ("9" * 5000, 9999999999999999),
])
def test_to_int(raw, expected):
    assert to_int(raw) == expected


def test_to_text():
    assert to_text("offer") == "offer"
    assert to_text(None) is None
    assert to_text({"sdp": "x"}) == '{"sdp": "x"}'
    assert to_text(5) == "5"


async def test_update_in_single_participant_room(room):
    a = room.connect(FakeSocket())
    drain(a)

    room.on_message(a, update(0, 1, 2, 1))

    assert room.displays.get(0, 1, 2) == 1
    assert sum(room.displays.serialize()) == 1
    assert drain(a) == []


async def test_update_is_broadcast_to_everyone_but_the_sender(room):
    a = room.connect(FakeSocket())
    b = room.connect(FakeSocket())
    c = room.connect(FakeSocket())
    for participant in (a, b, c):
        drain(participant)

    room.on_message(b, update(0, 3, 0, "1"))

    expected = {"type": "UPDATE", "data": {"display": 0, "pixel": {"x": 3, "y": 0}, "value": 1}}
    assert drain(a) == [expected]
    assert drain(b) == []
    assert drain(c) == [expected]


async def test_legacy_color_field(room):
    a = room.connect(FakeSocket())
    room.on_message(a, frame("UPDATE", {"display": 0, "pixel": {"x": 0, "y": 0}, "color": 1}))
    assert room.displays.get(0, 0, 0) == 1


@pytest.mark.parametrize("raw", [
    update(display=-1),
    update(display=1),
    update(x=4),
    update(y=-1),
    update(value=2),
    update(value="on"),
    update(x=None),
    update(display="9" * 5000),
    update(value="1" * 5000),
    frame("UPDATE", {"display": 0, "value": 1}),
    frame("UPDATE", {"display": 0, "pixel": [1, 2], "value": 1}),
    frame("UPDATE", "nope"),
    frame("DRAW", {"display": 0, "pixel": {"x": 1, "y": 1}, "value": 1}),
    json.dumps([1, 2, 3]),
    "{not json",
    b"\xff\xfe",
])
async def test_rejected_input_changes_nothing(room, raw):
    a = room.connect(FakeSocket())
    b = room.connect(FakeSocket())
    drain(a)
    drain(b)
    before = room.displays.serialize()

    room.on_message(a, raw)

    assert room.displays.serialize() == before
    assert drain(a) == []
    assert drain(b) == []


async def test_signal_goes_to_target_only(room):
    a = room.connect(FakeSocket())
    b = room.connect(FakeSocket())
    c = room.connect(FakeSocket())
    for participant in (a, b, c):
        drain(participant)

    room.on_message(a, frame("SIGNAL", {"peer": b.id, "signal": "offer-blob"}))

    assert drain(b) == [{"type": "SIGNAL", "data": {"peer": a.id, "signal": "offer-blob"}}]
    assert drain(a) == []
    assert drain(c) == []


async def test_structured_signal_is_forwarded_as_text(room):
    a = room.connect(FakeSocket())
    b = room.connect(FakeSocket())
    drain(b)

    room.on_message(a, frame("SIGNAL", {"peer": b.id, "signal": {"type": "offer"}}))

    [event] = drain(b)
    assert json.loads(event["data"]["signal"]) == {"type": "offer"}


@pytest.mark.parametrize("data", [
    {"peer": "nobody", "signal": "offer"},
    {"peer": None, "signal": "offer"},
    {"signal": "offer"},
    {"peer": "PEER", "signal": ""},
    {"peer": "PEER"},
])
async def test_bad_signals_are_dropped(room, data):
    a = room.connect(FakeSocket())
    b = room.connect(FakeSocket())
    drain(a)
    drain(b)
    if data.get("peer") == "PEER":
        data = dict(data, peer=b.id)

    room.on_message(a, frame("SIGNAL", data))

    assert drain(a) == []
    assert drain(b) == []
