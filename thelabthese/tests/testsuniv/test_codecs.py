from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated
import json

from django.test import SimpleTestCase
from thelabtyping.result import Err, Ok
import pydantic

from thelabthese.codecs import JSONCodec, TheseJSON, binary
from thelabthese.codecs.binary import (
    BYTES,
    FLOAT64,
    INT32,
    INT64,
    UTF8,
    TheseCodec,
)
from thelabthese.errors import BinaryDecodeError, DecodeError
from thelabthese.these import Both, That, These, This

from .models import Color, Listing


class BinaryCodecTest(SimpleTestCase):
    def test_wire_format(self) -> None:
        self.assertEqual(
            binary.encode(This(1), INT32, UTF8),
            bytes([0, 1, 0, 0, 0]),
        )
        self.assertEqual(
            binary.encode(That("a"), INT32, UTF8),
            bytes([1, 1, 97]),
        )
        self.assertEqual(
            binary.encode(Both(1, "a"), INT32, UTF8),
            bytes([2, 1, 0, 0, 0, 1, 97]),
        )

    def test_decode_both(self) -> None:
        result = binary.decode(bytes([2, 1, 0, 0, 0, 1, 97]), INT32, UTF8)
        self.assertIsInstance(result, Ok)
        self.assertEqual(result.ok_value, Both(1, "a"))

    def test_round_trip(self) -> None:
        values: list[These[int, str]] = [
            This(-7),
            That(""),
            That("héllo"),
            Both(2**40, "x" * 300),
        ]
        for value in values:
            with self.subTest(value=value):
                data = binary.encode(value, INT64, UTF8)
                self.assertEqual(binary.decode(data, INT64, UTF8), Ok(value))

    def test_nested_round_trip(self) -> None:
        codec = TheseCodec(FLOAT64, TheseCodec(BYTES, INT32))
        value = Both(1.5, Both(b"\x00\xff", 3))
        data = codec.write(value)
        self.assertEqual(data[0], 2)
        self.assertEqual(data[9], 2)
        self.assertEqual(codec.read(data, 0), (value, len(data)))

    def test_invalid_discriminant(self) -> None:
        result = binary.decode(bytes([3, 1, 0, 0, 0]), INT32, UTF8)
        self.assertIsInstance(result, Err)
        self.assertIsInstance(result.err_value, BinaryDecodeError)
        self.assertIsInstance(result.err_value, DecodeError)
        self.assertIn("invalid discriminant: 3", str(result.err_value))
        self.assertEqual(result.err_value.offset, 0)

    def test_truncated(self) -> None:
        for data in (b"", bytes([0, 1, 0]), bytes([2, 1, 0, 0, 0]), bytes([1, 5, 97])):
            with self.subTest(data=data):
                result = binary.decode(data, INT32, UTF8)
                self.assertIsInstance(result, Err)
                self.assertIn("unexpected end of input", str(result.err_value))

    def test_trailing_bytes(self) -> None:
        result = binary.decode(bytes([0, 1, 0, 0, 0, 9]), INT32, UTF8)
        self.assertIsInstance(result, Err)
        self.assertIn("trailing", str(result.err_value))

    def test_invalid_utf8(self) -> None:
        result = binary.decode(bytes([1, 1, 0xFF]), INT32, UTF8)
        self.assertIsInstance(result, Err)
        self.assertIn("invalid UTF-8", str(result.err_value))

    def test_long_length_prefix(self) -> None:
        text = "y" * 200
        data = binary.encode(That(text), INT32, UTF8)
        # 200 needs two LEB128 bytes
        self.assertEqual(data[:3], bytes([1, 0xC8, 0x01]))
        self.assertEqual(binary.decode(data, INT32, UTF8), Ok(That(text)))


class JSONCodecTest(SimpleTestCase):
    def setUp(self) -> None:
        self.codec = JSONCodec(int, str)

    def test_wire_format(self) -> None:
        self.assertEqual(self.codec.encode(This(1)), b'{"This":1}')
        self.assertEqual(self.codec.encode(That("a")), b'{"That":"a"}')
        self.assertEqual(self.codec.encode(Both(1, "a")), b'{"This":1,"That":"a"}')
        self.assertEqual(
            json.loads(self.codec.encode(Both(1, "a"))),
            {"This": 1, "That": "a"},
        )

    def test_to_jsonable(self) -> None:
        self.assertEqual(self.codec.to_jsonable(Both(1, "a")), {"This": 1, "That": "a"})
        self.assertEqual(self.codec.to_jsonable(That("a")), {"That": "a"})

    def test_decode(self) -> None:
        cases: list[tuple[str | dict[str, object], These[int, str]]] = [
            ('{"This": 1}', This(1)),
            ('{"That": "a"}', That("a")),
            ('{"This": 1, "That": "a"}', Both(1, "a")),
            ({"This": 1, "That": "a"}, Both(1, "a")),
        ]
        for data, expected in cases:
            with self.subTest(data=data):
                result = self.codec.decode(data)
                self.assertIsInstance(result, Ok)
                self.assertEqual(result.ok_value, expected)

    def test_decode_either_key_order(self) -> None:
        self.assertEqual(
            self.codec.decode('{"That": "a", "This": 1}'),
            self.codec.decode('{"This": 1, "That": "a"}'),
        )
        self.assertEqual(self.codec.decode(b'{"That": "a", "This": 1}'), Ok(Both(1, "a")))

    def test_decode_bad_shape(self) -> None:
        for data in (
            "{}",
            '{"Other": 1}',
            '{"This": 1, "Other": 2}',
            '{"This": 1, "That": "a", "Other": 2}',
            "[1]",
            "1",
            "null",
        ):
            with self.subTest(data=data):
                result = self.codec.decode(data)
                self.assertIsInstance(result, Err)
                self.assertIsInstance(result.err_value, pydantic.ValidationError)
                self.assertIn(
                    "Expected object with 'This' and 'That' keys only",
                    str(result.err_value),
                )

    def test_decode_bad_payload(self) -> None:
        result = self.codec.decode('{"This": "not a number", "That": "a"}')
        self.assertIsInstance(result, Err)
        self.assertIn("This", str(result.err_value))

    def test_decode_malformed_json(self) -> None:
        result = self.codec.decode('{"This": ')
        self.assertIsInstance(result, Err)

    def test_round_trip(self) -> None:
        codec = JSONCodec(Decimal, list[int])
        values: list[These[Decimal, list[int]]] = [
            This(Decimal("1.50")),
            That([]),
            Both(Decimal("-3"), [1, 2, 3]),
        ]
        for value in values:
            with self.subTest(value=value):
                self.assertEqual(codec.decode(codec.encode(value)), Ok(value))

    def test_nested(self) -> None:
        codec = JSONCodec(int, Annotated[These[str, int], TheseJSON(str, int)])
        value = Both(1, That(2))
        self.assertEqual(
            json.loads(codec.encode(value)),
            {"This": 1, "That": {"That": 2}},
        )


class PydanticModelTest(SimpleTestCase):
    def test_model_round_trip(self) -> None:
        listing = Listing(
            sku="A-1",
            pricing=Both(Decimal("9.99"), "sale"),
            availability=This(datetime(2025, 2, 10, 12, 0, 0, tzinfo=UTC)),
        )
        dumped = listing.model_dump(mode="json")
        self.assertEqual(
            dumped,
            {
                "sku": "A-1",
                "pricing": {"This": "9.99", "That": "sale"},
                "availability": {"This": "2025-02-10T12:00:00Z"},
            },
        )
        self.assertEqual(Listing.model_validate(dumped), listing)
        self.assertEqual(Listing.model_validate_json(listing.model_dump_json()), listing)

    def test_model_validates_payloads(self) -> None:
        listing = Listing.model_validate(
            {"sku": "A-2", "pricing": {"That": "call us"}, "availability": {"That": "red"}}
        )
        self.assertEqual(listing.pricing, That("call us"))
        self.assertEqual(listing.availability, That(Color.RED))
        with self.assertRaises(pydantic.ValidationError):
            Listing.model_validate({"sku": "A-3", "pricing": {"This": "abc"}})
        with self.assertRaises(pydantic.ValidationError):
            Listing.model_validate({"sku": "A-3", "pricing": {}})

    def test_model_accepts_values(self) -> None:
        listing = Listing(sku="A-4", pricing=This("12.5"))  # type:ignore[arg-type]
        self.assertEqual(listing.pricing, This(Decimal("12.5")))
        self.assertIsNone(listing.availability)
