"""Tests for jason.codec module."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import msgspec
import pytest

from jason.codec import Codec, DecodeResult, default_codec
from jason.errors import DecodeError, EncodeError, ErrorCode
from jason.number import Number
from jason.types import Array, Object, ValueArray, ValueObject
from jason.value import Value


class Record(msgspec.Struct):
    """Plain struct without deferred fields."""

    name: str
    count: int


class Envelope(msgspec.Struct):
    """Struct carrying an undecoded payload."""

    kind: str
    payload: Value


@dataclasses.dataclass
class Reading:
    """Dataclass carrying a precise number."""

    sensor: str
    level: Number


class Annotated(msgspec.Struct):
    """Struct mixing an untyped field with a deferred one."""

    note: Any
    payload: Value


class Opaque:
    """Type msgspec has no way to decode."""


class TestEncode:
    """Tests for Codec.encode and Codec.encode_bytes."""

    def test_encodes_builtins(self, codec: Codec) -> None:
        """Builtins encode to compact JSON."""
        assert codec.encode_bytes({"a": [1, 2.5, None, True]}) == b'{"a":[1,2.5,null,true]}'

    def test_encode_returns_value(self, codec: Codec) -> None:
        """encode wraps the bytes in a Value."""
        value = codec.encode(Record(name="a", count=3))
        assert isinstance(value, Value)
        assert bytes(value) == b'{"name":"a","count":3}'

    def test_embeds_value_verbatim(self, codec: Codec) -> None:
        """Nested values keep their exact formatting."""
        envelope = Envelope(kind="x", payload=Value('{"a": [1, 2]}'))
        assert codec.encode_bytes(envelope) == b'{"kind":"x","payload":{"a": [1, 2]}}'

    def test_empty_value_embeds_null(self, codec: Codec) -> None:
        """An empty nested value encodes as null."""
        assert codec.encode_bytes([Value(), Value("1")]) == b"[null,1]"

    def test_top_level_value(self, codec: Codec) -> None:
        """Encoding a Value alone reproduces its bytes."""
        assert codec.encode_bytes(Value("[true, false]")) == b"[true, false]"

    def test_embeds_number_verbatim(self, codec: Codec) -> None:
        """Numbers encode as their literal, not as strings."""
        payload = {"n": Number("12345678901234567890.000000001")}
        assert codec.encode_bytes(payload) == b'{"n":12345678901234567890.000000001}'

    @pytest.mark.parametrize("obj", [lambda: None, object(), Opaque()])
    def test_unsupported_object_raises(self, codec: Codec, obj: object) -> None:
        """Unencodable objects raise EncodeError."""
        with pytest.raises(EncodeError) as excinfo:
            codec.encode(obj)
        assert excinfo.value.code == ErrorCode.ENCODE_ERROR
        assert excinfo.value.__cause__ is not None

    def test_malformed_value_raises(self, codec: Codec) -> None:
        """A Value holding broken JSON cannot be embedded."""
        with pytest.raises(EncodeError, match="malformed JSON"):
            codec.encode({"x": Value("{bad")})

    def test_sorted_order(self) -> None:
        """order='sorted' sorts object keys."""
        assert Codec(order="sorted").encode_bytes({"b": 1, "a": 2}) == b'{"a":2,"b":1}'


class TestDecode:
    """Tests for strict and fallible decoding."""

    def test_int_into_float(self, codec: Codec) -> None:
        """An encoded integer decodes into float."""
        assert codec.decode(float, codec.encode(42)) == 42.0

    def test_struct_round_trip(self, codec: Codec) -> None:
        """Structs decode back field for field."""
        record = codec.decode(Record, codec.encode(Record(name="a", count=3)))
        assert record.name == "a"
        assert record.count == 3

    def test_accepts_raw_inputs(self, codec: Codec) -> None:
        """bytes, bytearray and str inputs are decoded directly."""
        assert codec.decode(list[int], b"[1,2,3]") == [1, 2, 3]
        assert codec.decode(list[int], bytearray(b"[1]")) == [1]
        assert codec.decode(list[int], "[2]") == [2]

    def test_empty_input_is_null(self, codec: Codec) -> None:
        """Empty values and empty bytes decode as null."""
        assert codec.decode(int | None, Value()) is None
        assert codec.decode(int | None, b"") is None
        assert codec.can_decode(int, Value()) is False

    def test_strict_raises_decode_error(self, codec: Codec) -> None:
        """decode raises with the msgspec error chained."""
        with pytest.raises(DecodeError, match="Cannot decode JSON into int") as excinfo:
            codec.decode(int, b'"x"')
        assert isinstance(excinfo.value.__cause__, msgspec.ValidationError)
        assert excinfo.value.context == {"target": "int"}

    def test_malformed_json(self, codec: Codec) -> None:
        """Syntax errors are recoverable in try_decode."""
        result = codec.try_decode(dict[str, int], b'{"a": ')
        assert result.ok is False
        assert result.value is None
        assert isinstance(result.error, DecodeError)

    def test_unsupported_target_is_recoverable(self, codec: Codec) -> None:
        """Types msgspec cannot decode into fail softly."""
        assert codec.can_decode(Opaque, b"{}") is False

    def test_lax_mode_coerces(self) -> None:
        """strict=False accepts numeric strings."""
        assert Codec(strict=False).decode(int, b'"1"') == 1
        assert Codec(strict=True).can_decode(int, b'"1"') is False

    def test_decoders_are_cached(self, codec: Codec) -> None:
        """One decoder is built per target type."""
        codec.decode(list[int], b"[1]")
        codec.decode(list[int], b"[2]")
        assert list(codec._decoders) == [list[int]]


class TestDeferredDecoding:
    """Decoding into Value and Number."""

    def test_top_level_value(self, codec: Codec) -> None:
        """A whole document decodes into a Value."""
        assert codec.decode(Value, b'{"a": 1}') == Value('{"a": 1}')

    def test_top_level_value_rejects_malformed(self, codec: Codec) -> None:
        """Decoding into Value still checks syntax."""
        assert codec.can_decode(Value, b"[1, 2") is False

    def test_value_object_keeps_exact_spans(self, codec: Codec) -> None:
        """Members of a ValueObject keep their original bytes."""
        members = codec.decode(ValueObject, b'{"a": [1, 2], "b": {"c" : true}, "n": null}')
        assert members["a"] == Value("[1, 2]")
        assert members["b"] == Value('{"c" : true}')
        assert members["n"].is_null()

    def test_value_array(self, codec: Codec) -> None:
        """Members of a ValueArray decode individually later."""
        members = codec.decode(ValueArray, b'[1, "two", [3]]')
        assert [str(member) for member in members] == ["1", '"two"', "[3]"]
        assert members[2].decode(list[int]) == [3]

    def test_nested_containers(self, codec: Codec) -> None:
        """Deferred members are found through nested containers and tuples."""
        decoded = codec.decode(
            tuple[Value, list[dict[str, Value]]],
            b'[{"x": 1}, [{"k": [true]}]]',
        )
        assert decoded == (Value('{"x": 1}'), [{"k": Value("[true]")}])

    def test_value_inside_struct(self, codec: Codec) -> None:
        """Struct fields of type Value hold the canonical span."""
        envelope = codec.decode(Envelope, b'{"kind": "x", "payload": {"a": [1, 2]}}')
        assert envelope.payload == Value('{"a":[1,2]}')
        assert envelope.payload.decode(dict[str, list[int]]) == {"a": [1, 2]}

    def test_number_keeps_precision(self, codec: Codec) -> None:
        """Numbers outside float64 precision survive decoding."""
        assert codec.decode(Number, b"12345678901234567890123") == Number("12345678901234567890123")
        prices = codec.decode(Object[Number], b'{"x": 1.50, "y": 0.10000000000000000001}')
        assert prices == {"x": Number("1.50"), "y": Number("0.10000000000000000001")}

    def test_number_round_trip_is_exact(self, codec: Codec) -> None:
        """Decoding then encoding a Number array reproduces the literals."""
        numbers = codec.decode(Array[Number], b"[1.50, 2e10, -0]")
        assert codec.encode_bytes(numbers) == b"[1.50,2e10,-0]"

    def test_number_inside_dataclass(self, codec: Codec) -> None:
        """Dataclass fields of type Number decode through the hook."""
        reading = codec.decode(Reading, b'{"sensor": "s1", "level": 10}')
        assert reading == Reading(sensor="s1", level=Number("10"))

    @pytest.mark.parametrize("literal", ["0.10000000000000000001", "1e400", "-2.50E-7"])
    def test_number_inside_dataclass_keeps_literal(self, codec: Codec, literal: str) -> None:
        """Dataclass fields of type Number keep every digit of the literal."""
        reading = codec.decode(Reading, f'{{"sensor": "s1", "level": {literal}}}')
        assert reading.level == Number(literal)

    def test_value_inside_struct_keeps_float_literals(self, codec: Codec) -> None:
        """Floats inside a Struct payload are not rounded through float64."""
        envelope = codec.decode(
            Envelope, b'{"kind": "x", "payload": {"p": [0.10000000000000000001, 1e400]}}'
        )
        assert envelope.payload == Value('{"p":[0.10000000000000000001,1e400]}')

    def test_untyped_fields_beside_value_are_floats(self, codec: Codec) -> None:
        """Untyped floats next to a deferred field still behave as floats."""
        annotated = codec.decode(Annotated, b'{"note": [1.5], "payload": 2.5}')
        assert annotated.note == [1.5]
        assert isinstance(annotated.note[0], float)
        assert annotated.payload == Value("2.5")

    def test_plain_decoders_return_builtin_floats(self, codec: Codec) -> None:
        """Targets without deferred types decode untyped floats as float."""
        decoded = codec.decode(dict[str, Any], b'{"x": 0.5}')
        assert type(decoded["x"]) is float

    def test_optional_value_members_keep_exact_spans(self, codec: Codec) -> None:
        """Value | None members are copied byte for byte and null becomes None."""
        members = codec.decode(dict[str, Value | None], b'{"a": [1, 2.50], "b": null}')
        assert members == {"a": Value("[1, 2.50]"), "b": None}

    def test_optional_number_members(self, codec: Codec) -> None:
        """Number | None members keep their literals."""
        numbers = codec.decode(list[Number | None], b"[1.50, null, 1e400]")
        assert numbers == [Number("1.50"), None, Number("1e400")]

    def test_optional_number_rejects_strings(self, codec: Codec) -> None:
        """Number | None still rejects non-numbers."""
        assert codec.can_decode(list[Number | None], b'["1"]') is False

    @pytest.mark.parametrize("data", [b'"abc"', b"null", b"[1]"])
    def test_number_rejects_non_numbers(self, codec: Codec, data: bytes) -> None:
        """Only JSON numbers decode into Number."""
        assert codec.can_decode(Number, data) is False

    def test_number_field_rejects_string(self, codec: Codec) -> None:
        """A string in a Number field is a recoverable error."""
        assert codec.can_decode(Reading, b'{"sensor": "s1", "level": "high"}') is False


class TestDecodeResult:
    """Tests for DecodeResult."""

    def test_success(self) -> None:
        """Successful results unwrap to their value."""
        result = DecodeResult(value=3)
        assert result.ok is True
        assert result.unwrap() == 3

    def test_failure_unwrap_raises(self) -> None:
        """unwrap raises the carried error."""
        error = DecodeError("boom")
        result: DecodeResult[int] = DecodeResult(error=error)
        with pytest.raises(DecodeError, match="boom"):
            result.unwrap()

    def test_unpacks_as_pair(self, codec: Codec) -> None:
        """Results unpack as (value, error)."""
        value, error = codec.try_decode(list[int], b"[1]")
        assert value == [1]
        assert error is None

        value, error = codec.try_decode(list[int], b"{}")
        assert value is None
        assert isinstance(error, DecodeError)

    def test_immutable(self) -> None:
        """Results are frozen."""
        result = DecodeResult(value=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 2  # type: ignore[misc]


class TestLogging:
    """Codec emits debug records, never error records."""

    def test_logs_codec_creation(self, caplog: pytest.LogCaptureFixture) -> None:
        """Creating a codec logs its configuration."""
        caplog.set_level(logging.DEBUG, logger="jason")
        Codec(order="sorted")
        record = next(r for r in caplog.records if r.getMessage() == "Codec created")
        assert record.operation == "codec_init"  # type: ignore[attr-defined]
        assert record.order == "sorted"  # type: ignore[attr-defined]

    def test_logs_decoder_build_once(
        self, codec: Codec, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Building a decoder is logged once per type."""
        caplog.set_level(logging.DEBUG, logger="jason")
        codec.decode(ValueObject, b"{}")
        codec.decode(ValueObject, b"{}")
        builds = [r for r in caplog.records if r.getMessage() == "Built decoder"]
        assert len(builds) == 1
        assert builds[0].captures_raw is True  # type: ignore[attr-defined]
        assert builds[0].keeps_float_text is False  # type: ignore[attr-defined]

    def test_failures_are_not_logged(
        self, codec: Codec, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Decode failures are returned, not logged."""
        caplog.set_level(logging.DEBUG, logger="jason")
        codec.try_decode(int, b"nope")
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


class TestDefaultCodec:
    """Tests for default_codec."""

    def test_is_shared(self) -> None:
        """The default codec is built once."""
        assert default_codec() is default_codec()

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JASON_* variables configure the default codec."""
        monkeypatch.setenv("JASON_ORDER", "sorted")
        monkeypatch.setenv("JASON_STRICT", "false")
        codec = default_codec()
        assert codec.order == "sorted"
        assert codec.strict is False
        assert repr(codec) == "Codec(strict=False, order='sorted')"
