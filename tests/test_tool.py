#
# Toolo - Loose API Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from toolo import tool
from toolo.convert import ElementConversionError, NilSourceError, NotASliceError
from toolo.errors import CatchableError
from toolo.strings import Varchar


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class Src:
    name: str
    age: int


@dataclass
class Dest:
    name: str


# Tests ----------------------------------------------------------------------------------------------------------------

class TestConvertSlice:

    def test_success(self):
        assert tool.convert_slice([1, 2], 0.0) == [1.0, 2.0]

    def test_records(self):
        assert tool.convert_slice([Src("a", 1)], Dest) == [Dest("a")]

    @pytest.mark.parametrize(
        "source, sample, error_type, reason",
        [
            pytest.param(None, 0, NilSourceError, "source sequence is None", id="nil"),
            pytest.param(42, 0, NotASliceError, "source must be a sequence", id="not-a-slice"),
            pytest.param([object()], 0, ElementConversionError, "cannot convert element at index 0", id="element"),
        ],
    )
    def test_failure_escalates(self, source, sample, error_type, reason):
        with pytest.raises(CatchableError) as exc:
            tool.convert_slice(source, sample)
        assert str(exc.value).startswith(f"ConvertSlice failed: {reason}")
        assert isinstance(exc.value.error, error_type)
        assert exc.value.__cause__ is exc.value.error

    def test_caught_by_boundary(self):
        caught = []
        with tool.catch(caught.append):
            tool.convert_slice(None, 0)
            pytest.fail("convert_slice should have escalated")
        assert len(caught) == 1
        assert isinstance(caught[0], NilSourceError)


class TestRandInt:

    def test_in_range(self):
        assert 3 <= tool.rand_int(3, 9) < 9

    def test_invalid_range_escalates(self):
        with pytest.raises(CatchableError, match=r"must be less than") as exc:
            tool.rand_int(9, 3)
        assert isinstance(exc.value.error, ValueError)


class TestJsonify:

    def test_success(self):
        assert tool.jsonify({"a": [1]}) == '{"a":[1]}'

    def test_failure_logged_and_empty(self, buffer_logger):
        res = tool.jsonify(object())
        assert isinstance(res, Varchar)
        assert res == ""
        assert buffer_logger.buf.startswith("failed to marshal to JSON")


class TestObjectify:

    def test_success(self):
        out = {}
        assert tool.objectify('{"a":1}', out) is True
        assert out == {"a": 1}

    def test_dataclass_target(self):
        out = Dest("a")
        assert tool.objectify('{"name":"b"}', out) is True
        assert out == Dest("b")

    def test_failure_logged(self, buffer_logger):
        out = {}
        assert tool.objectify("{bad", out) is False
        assert out == {}
        assert buffer_logger.buf.startswith("failed to unmarshal JSON")


class TestExecTemplate:

    def test_success(self):
        assert tool.exec_template("hi {name}", {"name": "bo"}) == "hi bo"

    def test_failure_logged_and_empty(self, buffer_logger):
        assert tool.exec_template("hi {", {}) == ""
        assert buffer_logger.buf.startswith("failed to parse template")


class TestRetryFunc:

    def test_success_returns_none(self):
        calls = []

        def job():
            calls.append(1)
            if len(calls) < 3:
                raise ValueError(f"try {len(calls)}")

        assert tool.retry_func(5, 0, job) is None
        assert len(calls) == 3

    def test_retries_logged(self, buffer_logger):
        calls = []

        def job():
            calls.append(1)
            if len(calls) < 3:
                raise ValueError(f"try {len(calls)}")

        tool.retry_func(5, 0, job)
        assert buffer_logger.buf == "retrying after error: try 1\nretrying after error: try 2\n"

    def test_exhausted_returns_last_error(self, buffer_logger):
        def job():
            raise KeyError("gone")

        res = tool.retry_func(2, 0, job)
        assert isinstance(res, KeyError)
        assert buffer_logger.buf.count("retrying after error") == 2


class TestReexports:

    @pytest.mark.parametrize("name", tool.__all__)
    def test_public_names_present(self, name):
        assert callable(getattr(tool, name))

