import json

from kate.result import Result


def test_to_dict_omits_missing_data():
    assert Result(errno=0, errmsg="ok").to_dict() == {"errno": 0, "errmsg": "ok"}


def test_to_dict_includes_data():
    result = Result(errno=1, errmsg="failed", data={"id": 7})
    assert result.to_dict() == {"errno": 1, "errmsg": "failed", "data": {"id": 7}}


def test_empty_data_is_kept():
    body = Result(errno=0, errmsg="ok", data=[]).to_dict()
    assert "data" in body
    assert body["data"] == []


def test_json_round_trip():
    result = Result(errno=2, errmsg="bad request", data=["a", "b"])
    decoded = json.loads(json.dumps(result.to_dict()))
    assert Result(**decoded) == result


def test_defaults_round_trip():
    decoded = json.loads(json.dumps(Result().to_dict()))
    assert "data" not in decoded
    assert Result(**decoded) == Result()