#
# Toolo - Records Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, NamedTuple

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from toolo.records import RecordField, build_record, is_record, is_record_type, record_fields, record_values


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class User:
    id: int
    name: str = "anon"
    roles: list[str] = field(default_factory=list)
    secret: str = field(init=False, default="hidden")


class Coord(NamedTuple):
    lat: float
    lon: float = 0.0


class Untyped(NamedTuple("Untyped", [("a", int)])):
    pass


@dataclass
class Chain:
    n: int
    nxt: "Chain"


class Branch(NamedTuple):
    label: str
    owner: "Chain"


# Tests ----------------------------------------------------------------------------------------------------------------

class TestIsRecord:

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(User, True, id="dataclass"),
            pytest.param(Coord, True, id="namedtuple"),
            pytest.param(tuple, False, id="tuple"),
            pytest.param(dict, False, id="dict"),
            pytest.param(User(1), False, id="instance"),
        ],
    )
    def test_is_record_type(self, obj, expected):
        assert is_record_type(obj) is expected

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(User(1), True, id="dataclass-instance"),
            pytest.param(Coord(1.0), True, id="namedtuple-instance"),
            pytest.param(User, False, id="class"),
            pytest.param((1, 2), False, id="tuple"),
        ],
    )
    def test_is_record(self, obj, expected):
        assert is_record(obj) is expected


class TestRecordFields:

    def test_dataclass(self):
        fields = record_fields(User)
        assert list(fields) == ["id", "name", "roles", "secret"]
        assert fields["id"] == RecordField("id", int, settable=True, has_default=False)
        assert fields["name"].has_default
        assert fields["roles"].type == list[str]
        assert fields["roles"].has_default
        assert not fields["secret"].settable

    def test_namedtuple(self):
        fields = record_fields(Coord)
        assert fields["lat"] == RecordField("lat", float)
        assert fields["lon"].has_default

    def test_namedtuple_without_annotations(self):
        assert record_fields(Untyped)["a"].type in (int, Any)

    def test_not_a_record(self):
        with pytest.raises(TypeError, match=r"record class expected"):
            record_fields(int)


class TestRecordValues:

    def test_dataclass(self):
        assert record_values(User(1, "bob")) == {"id": 1, "name": "bob", "roles": [], "secret": "hidden"}

    def test_namedtuple(self):
        assert record_values(Coord(1.5, 2.5)) == {"lat": 1.5, "lon": 2.5}

    def test_not_a_record(self):
        with pytest.raises(TypeError, match=r"record instance expected"):
            record_values({"a": 1})


class TestBuildRecord:

    def test_full(self):
        assert build_record(User, {"id": 2, "name": "amy", "roles": ["x"]}) == User(2, "amy", ["x"])

    def test_missing_uses_default_then_zero(self):
        user = build_record(User, {})
        assert user == User(0)
        assert user.name == "anon"

    def test_unknown_and_unsettable_names_ignored(self):
        user = build_record(User, {"id": 3, "secret": "leak", "bogus": 1})
        assert user.id == 3
        assert user.secret == "hidden"

    def test_namedtuple(self):
        assert build_record(Coord, {"lat": 4.0}) == Coord(4.0, 0.0)

    def test_self_reference_left_none(self):
        assert build_record(Chain, {"n": 1}) == Chain(1, None)

    def test_in_progress_types_left_none(self):
        assert build_record(Branch, {"label": "b"}, in_progress=frozenset({Chain})) == Branch("b", None)

    def test_nested_record_built_once(self):
        assert build_record(Branch, {}) == Branch("", Chain(0, None))
