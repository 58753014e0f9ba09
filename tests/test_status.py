import json

import pytest

from mcquery.status import (
    PlayerSample,
    Players,
    Status,
    Version,
    deserialize_status,
)

FULL = {
    "version": {"name": "1.21.8", "protocol": 772},
    "players": {
        "max": 20,
        "online": 2,
        "sample": [
            {"name": "Alice", "id": "id-alice"},
            {"name": "Bob", "id": "id-bob"},
        ],
    },
    "description": {"text": "A Minecraft Server"},
    "enforcesSecureChat": True,
}


def test_full_document():
    status = deserialize_status(json.dumps(FULL))
    assert status == Status(
        version=Version(name="1.21.8", protocol=772),
        description={"text": "A Minecraft Server"},
        players=Players(
            max=20,
            online=2,
            sample=[PlayerSample(id="id-alice", name="Alice"), PlayerSample(id="id-bob", name="Bob")],
        ),
    )


def test_keys_match_case_insensitively():
    status = deserialize_status('{"Players": {"MAX": 5, "Online": 1}, "VERSION": {"Protocol": 3}}')
    assert status.players.max == 5
    assert status.players.online == 1
    assert status.version.protocol == 3


def test_missing_fields_take_defaults():
    assert deserialize_status("{}") == Status()


def test_null_document_gives_defaults():
    assert deserialize_status("null") == Status()


def test_null_sample_is_empty():
    status = deserialize_status('{"players": {"max": 1, "online": 0, "sample": null}}')
    assert status.players.sample == []


def test_string_description():
    status = deserialize_status('{"description": "hello"}')
    assert status.description == "hello"
    assert status.description_text() == "hello"


def test_description_text_from_object():
    status = deserialize_status(json.dumps(FULL))
    assert status.description_text() == "A Minecraft Server"


@pytest.mark.parametrize("description", [None, {"extra": []}, {"text": 5}, 12, ["a"]])
def test_description_text_unknown(description):
    assert Status(description=description).description_text() is None


def test_invalid_json():
    with pytest.raises(ValueError):
        deserialize_status("{not json")


def test_non_object_document():
    with pytest.raises(ValueError):
        deserialize_status("[1, 2]")


@pytest.mark.parametrize(
    "document",
    [
        '{"players": {"max": "many"}}',
        '{"players": {"max": 1.5}}',
        '{"players": {"online": true}}',
        '{"version": {"name": 7}}',
        '{"players": {"sample": {"name": "x"}}}',
        '{"players": {"sample": [1]}}',
        '{"players": 3}',
        '{"players": {"max": NaN}}',
    ],
)
def test_type_mismatch_raises(document):
    with pytest.raises(ValueError):
        deserialize_status(document)


def test_round_trip_through_json():
    original = Status(
        version=Version(name="v", protocol=1),
        description="motd",
        players=Players(max=3, online=1, sample=[PlayerSample(id="i", name="n")]),
    )
    document = {
        "version": {"name": original.version.name, "protocol": original.version.protocol},
        "description": original.description,
        "players": {
            "max": original.players.max,
            "online": original.players.online,
            "sample": [{"id": p.id, "name": p.name} for p in original.players.sample],
        },
    }
    assert deserialize_status(json.dumps(document)) == original