"""Unit tests for call envelope decoding and encoding."""

import pytest

from dualrpc.core.errors import (
    DecodeError,
    DuplicateFieldError,
    EncodeError,
    IncompatibleDialectError,
    InvalidIdShapeError,
    InvalidMethodShapeError,
    InvalidParamsShapeError,
    InvalidRequestShapeError,
    MissingFieldError,
    UnknownFieldError,
)
from dualrpc.core.jsontext import dumps, loads
from dualrpc.rpc.envelopes import InvalidCall, MethodCall, Notification
from dualrpc.rpc.request_codec import decode_call, encode_call, salvage_call
from dualrpc.rpc.types import Dialect, Id, Params


def decode(text, dialects=frozenset(Dialect)):
    return decode_call(loads(text), dialects)


def encode(call, dialects=frozenset(Dialect)):
    return dumps(encode_call(call, dialects))


METHOD_CALL_CASES = [
    (
        MethodCall("foo", Params.array([1, True]), Id(1), Dialect.V1),
        '{"method":"foo","params":[1,true],"id":1}',
    ),
    (
        MethodCall("foo", Params.array([]), Id(1), Dialect.V1),
        '{"method":"foo","params":[],"id":1}',
    ),
    (
        MethodCall("foo", Params.array([1, True]), Id(1), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","params":[1,true],"id":1}',
    ),
    (
        MethodCall("foo", Params.array([]), Id(1), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","params":[],"id":1}',
    ),
    (
        MethodCall("foo", Params.absent(), Id(1), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","id":1}',
    ),
    (
        MethodCall("foo", Params.map({"key": "value"}), Id("abc"), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","params":{"key":"value"},"id":"abc"}',
    ),
]

NOTIFICATION_CASES = [
    (
        Notification("foo", Params.array([1, True]), Dialect.V1),
        '{"method":"foo","params":[1,true],"id":null}',
    ),
    (
        Notification("foo", Params.array([]), Dialect.V1),
        '{"method":"foo","params":[],"id":null}',
    ),
    (
        Notification("foo", Params.array([1, True]), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","params":[1,true]}',
    ),
    (
        Notification("foo", Params.array([]), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo","params":[]}',
    ),
    (
        Notification("foo", Params.absent(), Dialect.V2),
        '{"jsonrpc":"2.0","method":"foo"}',
    ),
]

INVALID_CASES = [
    # 1.0
    '{"method":"foo","params":[1,true],"id":1,"unknown":[]}',
    '{"method":"foo","params":[1,true],"id":1.2}',
    '{"method":"foo","params":[1,true],"id":null,"unknown":[]}',
    '{"method":"foo","params":[1,true],"unknown":[]}',
    '{"method":"foo","params":[1,true]}',
    '{"method":"foo","unknown":[]}',
    '{"method":1,"unknown":[]}',
    '{"unknown":[]}',
    # 2.0
    '{"jsonrpc":"2.0","method":"foo","params":[1,true],"id":1,"unknown":[]}',
    '{"jsonrpc":"2.0","method":"foo","params":[1,true],"id":1.2}',
    '{"jsonrpc":"2.0","method":"foo","params":[1,true],"id":null,"unknown":[]}',
    '{"jsonrpc":"2.0","method":"foo","params":[1,true],"id":null}',
    '{"jsonrpc":"2.0","method":"foo","params":[1,true],"unknown":[]}',
    '{"jsonrpc":"2.0","method":"foo","unknown":[]}',
    '{"jsonrpc":"2.0","unknown":[]}',
]


class TestKnownEnvelopes:
    """Every known envelope encodes to its exact text and decodes back."""

    @pytest.mark.parametrize(("call", "text"), METHOD_CALL_CASES)
    def test_method_call(self, call, text):
        assert encode(call) == text
        assert decode(text) == call

    @pytest.mark.parametrize(("call", "text"), NOTIFICATION_CASES)
    def test_notification(self, call, text):
        assert encode(call) == text
        decoded = decode(text)
        assert decoded == call
        assert decoded.is_notification


class TestDecodeCall:
    """Tests for decode_call."""

    @pytest.mark.parametrize("text", INVALID_CASES)
    def test_invalid_requests_rejected(self, text):
        with pytest.raises(DecodeError):
            decode(text)

    def test_dialect_is_inferred(self):
        assert decode('{"method":"foo","params":[],"id":1}').dialect is Dialect.V1
        assert decode('{"jsonrpc":"2.0","method":"foo","id":1}').dialect is Dialect.V2

    def test_unknown_field_is_named(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            decode('{"jsonrpc":"2.0","method":"foo","id":1,"extra":true}')

        assert exc_info.value.field == "extra"

    def test_duplicate_field_rejected(self):
        with pytest.raises(DuplicateFieldError) as exc_info:
            decode('{"jsonrpc":"2.0","method":"foo","id":1,"id":2}')

        assert exc_info.value.field == "id"

    def test_missing_method(self):
        with pytest.raises(MissingFieldError):
            decode('{"jsonrpc":"2.0","id":1}')

    @pytest.mark.parametrize("method", ["1", "null", '""', "[]"])
    def test_bad_method(self, method):
        with pytest.raises(InvalidMethodShapeError):
            decode(f'{{"jsonrpc":"2.0","method":{method},"id":1}}')

    @pytest.mark.parametrize("params", ["null", "1", '"x"', "true"])
    def test_bad_params(self, params):
        """A present params member must be an array or an object."""
        with pytest.raises(InvalidParamsShapeError):
            decode(f'{{"jsonrpc":"2.0","method":"foo","params":{params},"id":1}}')

    @pytest.mark.parametrize("id", ["1.2", "-1", "18446744073709551616", "true", "[1]", "{}"])
    def test_bad_id(self, id):
        with pytest.raises(InvalidIdShapeError):
            decode(f'{{"jsonrpc":"2.0","method":"foo","id":{id}}}')

    @pytest.mark.parametrize("tag", ['"1.0"', '"2"', "2.0", "null"])
    def test_bad_jsonrpc_tag(self, tag):
        """A present jsonrpc member other than "2.0" matches neither dialect."""
        with pytest.raises(IncompatibleDialectError):
            decode(f'{{"jsonrpc":{tag},"method":"foo","id":1}}')

    def test_v2_null_id_rejected(self):
        with pytest.raises(IncompatibleDialectError):
            decode('{"jsonrpc":"2.0","method":"foo","id":null}')

    def test_v1_map_params_rejected(self):
        with pytest.raises(IncompatibleDialectError):
            decode('{"method":"foo","params":{"a":1},"id":1}')

    def test_v1_absent_params_rejected(self):
        with pytest.raises(IncompatibleDialectError):
            decode('{"method":"foo","id":1}')

    def test_v1_absent_id_rejected(self):
        """1.0 notifications spell out a null id; leaving it out is an error."""
        with pytest.raises(IncompatibleDialectError):
            decode('{"method":"foo","params":[]}')

    def test_not_an_object(self):
        with pytest.raises(InvalidRequestShapeError):
            decode_call([1])

    def test_exclusive_dialect(self):
        """A codec limited to one dialect refuses well-formed envelopes of the other."""
        v1_only = frozenset({Dialect.V1})
        v2_only = frozenset({Dialect.V2})

        assert decode('{"method":"foo","params":[],"id":1}', v1_only).dialect is Dialect.V1
        with pytest.raises(IncompatibleDialectError):
            decode('{"jsonrpc":"2.0","method":"foo","id":1}', v1_only)
        with pytest.raises(IncompatibleDialectError):
            decode('{"method":"foo","params":[],"id":1}', v2_only)

    def test_params_nesting_preserved(self):
        call = decode('{"jsonrpc":"2.0","method":"foo","params":[{"a":[1,{"b":null}]}],"id":1}')
        assert call.params.to_json() == [{"a": [1, {"b": None}]}]


class TestEncodeCall:
    """Tests for encode_call."""

    def test_v1_map_params_refused(self):
        call = MethodCall("foo", Params.map({"a": 1}), Id(1), Dialect.V1)
        with pytest.raises(IncompatibleDialectError):
            encode_call(call)

    def test_v1_absent_params_refused(self):
        call = Notification("foo", Params.absent(), Dialect.V1)
        with pytest.raises(IncompatibleDialectError):
            encode_call(call)

    def test_invalid_call_refused(self):
        with pytest.raises(EncodeError):
            encode_call(InvalidCall(Id(1), Dialect.V2, "bad"))

    def test_non_call_refused(self):
        with pytest.raises(EncodeError):
            encode_call({"method": "foo"})

    def test_dialect_not_enabled(self):
        call = MethodCall.new_v2("foo", None, 1)
        with pytest.raises(IncompatibleDialectError):
            encode_call(call, frozenset({Dialect.V1}))

    def test_to_json_and_str(self):
        call = MethodCall.new_v2("foo", [1], "x")
        assert call.to_json() == {"jsonrpc": "2.0", "method": "foo", "params": [1], "id": "x"}
        assert str(call) == '{"jsonrpc":"2.0","method":"foo","params":[1],"id":"x"}'


class TestSalvageCall:
    """Tests for salvage_call."""

    def test_keeps_readable_id(self):
        value = loads('{"jsonrpc":"2.0","method":1,"id":7}')
        call = salvage_call(value, "bad method")

        assert call == InvalidCall(Id(7), Dialect.V2, "bad method")

    def test_unreadable_id_becomes_null(self):
        call = salvage_call(loads('{"jsonrpc":"2.0","method":"foo","id":1.5}'), "bad id")
        assert call.id == Id.null()

    def test_v1_guess_without_tag(self):
        call = salvage_call(loads('{"method":"foo","params":{},"id":"a"}'), "map params")
        assert call.dialect is Dialect.V1
        assert call.id == Id("a")

    def test_non_object_element(self):
        call = salvage_call(1, "not an object")
        assert call.id.is_null
        assert call.dialect is Dialect.V2

    def test_guess_narrowed_to_enabled_dialect(self):
        call = salvage_call(loads('{"method":"foo","id":3}'), "x", frozenset({Dialect.V2}))
        assert call.dialect is Dialect.V2

    def test_invalid_call_accessors(self):
        call = salvage_call(loads('{"unknown":[]}'), "unknown field")
        assert call.method is None
        assert call.params.is_absent
        assert not call.is_notification
        with pytest.raises(EncodeError):
            call.to_json()
