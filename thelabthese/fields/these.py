from collections.abc import Callable, Sequence
from typing import Any
import json
import logging

from django.core.exceptions import ValidationError
from django.db.backends.base.base import BaseDatabaseWrapper
from django.db.models import Model, expressions
from django.db.models.expressions import Expression
from django.db.models.fields.json import JSONField, KeyTransform
from django.utils.translation import gettext_lazy as _
from django_stubs_ext import StrOrPromise
from thelabtyping.result import Err, Ok
import pydantic_core

from ..codecs.json import JSONCodec
from ..these import These, is_these

logger = logging.getLogger(__name__)


def _validation_error_to_django(
    err: pydantic_core.ValidationError,
) -> ValidationError:
    """
    Convert the Pydantic error into a Django error
    """
    return ValidationError(
        str(err),
        code="invalid",
        params={
            "details": err.errors(),
        },
    )


class TheseField[_LT, _RT](JSONField[These[_LT, _RT], These[_LT, _RT]]):
    """
    Subclass of Django's
    [JSONField](https://docs.djangoproject.com/en/dev/ref/models/fields/#django.db.models.JSONField)
    that stores a `These` value using its JSON wire format
    (`{"This": ...}`, `{"That": ...}` or `{"This": ..., "That": ...}`).
    Payloads are validated as `left_type` and `right_type` on the way in and
    out of the database.
    """

    description = "A This/That/Both value stored as JSON in the DB"

    left_type: Any
    right_type: Any
    coerce_invalid_data: Callable[[Any], Any] | None

    def __init__(
        self,
        left_type: Any,
        right_type: Any,
        verbose_name: StrOrPromise | None = None,
        name: str | None = None,
        coerce_invalid_data: Callable[[Any], Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self.left_type = left_type
        self.right_type = right_type
        self.codec = JSONCodec(left_type, right_type)
        self.coerce_invalid_data = coerce_invalid_data
        super().__init__(
            verbose_name=verbose_name,
            name=name,
            **kwargs,
        )

    def deconstruct(self) -> tuple[str, str, Sequence[Any], dict[str, Any]]:
        name, path, args, kwargs = super().deconstruct()
        kwargs["left_type"] = self.left_type
        kwargs["right_type"] = self.right_type
        kwargs["coerce_invalid_data"] = self.coerce_invalid_data
        return name, path, args, kwargs

    def from_db_value(
        self,
        value: str | None,
        expression: Expression,
        connection: BaseDatabaseWrapper,
    ) -> These[_LT, _RT] | None:
        """
        Convert DB value -> Python value
        """
        if value is None:
            return value

        # Key transforms (`terms__That`) select a bare payload, not a whole
        # These value
        if isinstance(expression, KeyTransform):
            return super().from_db_value(value, expression, connection)  # type:ignore[no-any-return]

        result = self.codec.decode(value)
        if isinstance(result, Ok):
            return result.ok_value

        # Give `coerce_invalid_data` a chance to migrate rows written in an
        # older shape before giving up.
        if self.coerce_invalid_data is not None:
            try:
                parsed_value = json.loads(value, cls=self.decoder)
            except json.JSONDecodeError:
                raise ValidationError(
                    _("Could not decode value as JSON"),
                    code="invalid",
                    params={"value": value},
                )
            logger.info("Coercing invalid These data loaded for %s", self.name)
            result = self.codec.decode(self.coerce_invalid_data(parsed_value))
            if isinstance(result, Ok):
                return result.ok_value

        raise _validation_error_to_django(result.err_value)

    def get_db_prep_value(
        self,
        value: Any,
        connection: BaseDatabaseWrapper,
        prepared: bool = False,
    ) -> Any:
        """
        Convert Python value -> DB value
        """
        if not prepared:
            value = self.get_prep_value(value)
        if isinstance(value, expressions.Value) and isinstance(
            value.output_field, JSONField
        ):
            value = value.value
        elif is_these(value):
            value = self.codec.to_jsonable(value)
        elif hasattr(value, "as_sql"):
            return value

        return connection.ops.adapt_json_value(value, self.encoder)

    def validate(self, value: Any, model_instance: Model | None) -> None:
        if not is_these(value):
            raise ValidationError(
                _("Given value is type[%s], expected This, That or Both")
                % (type(value),)
            )
        # Payload types get checked before anything is serialized
        result = self.codec.decode(value)
        if isinstance(result, Err):
            raise _validation_error_to_django(result.err_value)
        super().validate(self.codec.to_jsonable(result.ok_value), model_instance)


__all__ = [
    "TheseField",
]
