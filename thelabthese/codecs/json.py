"""
JSON wire format for ``These`` values, built on Pydantic.

::

    This(a)    -> {"This": a}
    That(b)    -> {"That": b}
    Both(a, b) -> {"This": a, "That": b}

Use :class:`TheseJSON` as ``Annotated`` metadata to put ``These`` values in
Pydantic models:

.. code-block:: python

    class Pricing(pydantic.BaseModel):
        price: Annotated[These[Decimal, str], TheseJSON(Decimal, str)]

or :class:`JSONCodec` to encode/decode standalone values.
"""

from typing import Annotated, Any
import logging

from pydantic import GetCoreSchemaHandler, TypeAdapter
from pydantic_core import PydanticCustomError, core_schema
from thelabtyping.result import Err, Ok, Result
import pydantic_core

from ..these import Both, That, These, This, is_these

logger = logging.getLogger(__name__)

THIS_KEY = "This"
THAT_KEY = "That"

_VALID_KEY_SETS = (
    frozenset({THIS_KEY}),
    frozenset({THAT_KEY}),
    frozenset({THIS_KEY, THAT_KEY}),
)


def _to_fields(value: These[Any, Any]) -> dict[str, Any]:
    return value.case_of(
        lambda a: {THIS_KEY: a},
        lambda b: {THAT_KEY: b},
        lambda a, b: {THIS_KEY: a, THAT_KEY: b},
    )


def _check_shape(value: Any) -> Any:
    # Already-built values are re-validated field by field
    if is_these(value):
        return _to_fields(value)
    if not isinstance(value, dict) or frozenset(value) not in _VALID_KEY_SETS:
        raise PydanticCustomError(
            "these_shape",
            "Expected object with 'This' and 'That' keys only, got {found}",
            {"found": repr(value)},
        )
    return value


def _from_fields(fields: dict[str, Any]) -> These[Any, Any]:
    if THIS_KEY in fields and THAT_KEY in fields:
        return Both(fields[THIS_KEY], fields[THAT_KEY])
    if THIS_KEY in fields:
        return This(fields[THIS_KEY])
    return That(fields[THAT_KEY])


def _serialize(
    value: These[Any, Any],
    handler: core_schema.SerializerFunctionWrapHandler,
) -> Any:
    return handler(_to_fields(value))


class TheseJSON:
    """
    Pydantic annotation describing how to validate and serialize a
    ``These[L, R]`` whose payloads are validated as ``left_type`` and
    ``right_type``.
    """

    def __init__(self, left_type: Any, right_type: Any) -> None:
        self.left_type = left_type
        self.right_type = right_type

    def __repr__(self) -> str:
        return f"TheseJSON({self.left_type!r}, {self.right_type!r})"

    def __get_pydantic_core_schema__(
        self,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        fields_schema = core_schema.typed_dict_schema(
            {
                THIS_KEY: core_schema.typed_dict_field(
                    handler.generate_schema(self.left_type),
                    required=False,
                ),
                THAT_KEY: core_schema.typed_dict_field(
                    handler.generate_schema(self.right_type),
                    required=False,
                ),
            },
            extra_behavior="forbid",
        )
        return core_schema.no_info_after_validator_function(
            _from_fields,
            core_schema.no_info_before_validator_function(
                _check_shape,
                fields_schema,
            ),
            serialization=core_schema.wrap_serializer_function_ser_schema(
                _serialize,
                info_arg=False,
                schema=fields_schema,
            ),
        )


class JSONCodec[_LT, _RT]:
    """Encode and decode ``These[L, R]`` values to and from JSON."""

    def __init__(self, left_type: type[_LT] | Any, right_type: type[_RT] | Any) -> None:
        self.left_type = left_type
        self.right_type = right_type
        self.adapter: TypeAdapter[These[_LT, _RT]] = TypeAdapter(
            Annotated[Any, TheseJSON(left_type, right_type)]
        )

    def encode(self, value: These[_LT, _RT]) -> bytes:
        return self.adapter.dump_json(value)

    def to_jsonable(self, value: These[_LT, _RT]) -> dict[str, Any]:
        """The value as plain JSON-compatible Python data."""
        return self.adapter.dump_python(value, mode="json")  # type:ignore[no-any-return]

    def decode(
        self,
        value: str | bytes | dict[str, Any] | These[_LT, _RT],
    ) -> Result[These[_LT, _RT], pydantic_core.ValidationError]:
        """
        Decode from a JSON document (``str``/``bytes``), already parsed
        JSON data, or a ``These`` value whose payloads need validating.
        """
        try:
            if isinstance(value, str) or isinstance(value, bytes):
                return Ok(self.adapter.validate_json(value))
            return Ok(self.adapter.validate_python(value))
        except pydantic_core.ValidationError as e:
            logger.debug("Failed to decode These value: %s", e)
            return Err(e)


__all__ = [
    "THIS_KEY",
    "THAT_KEY",
    "TheseJSON",
    "JSONCodec",
]
