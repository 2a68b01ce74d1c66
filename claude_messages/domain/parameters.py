"""
Sampling Parameter Domain Model

Bounded numeric value types. Each one validates its range when it is constructed,
either directly (Temperature(0.7)) or as a pydantic field type, and serializes to a
plain JSON number.
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import core_schema

from claude_messages.common.errors import ValidationError
from claude_messages.domain.model import ClaudeModel


class _BoundedFloat(float):
    field_name: ClassVar[str]
    minimum: ClassVar[float]
    maximum: ClassVar[float]

    def __new__(cls, value: Any):
        if isinstance(value, bool):
            raise ValidationError(cls.field_name, "must be a number", value=value)
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(cls.field_name, "must be a number", value=value) from e
        if not cls.minimum <= number <= cls.maximum:
            raise ValidationError(
                cls.field_name,
                f"must be between {cls.minimum} and {cls.maximum}",
                value=value,
                expected=f"{cls.minimum} <= {cls.field_name} <= {cls.maximum}",
            )
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"

    @classmethod
    def _validate(cls, value: Any):
        return value if type(value) is cls else cls(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(float),
        )


class _BoundedInt(int):
    field_name: ClassVar[str]
    minimum: ClassVar[int]
    maximum: ClassVar[Optional[int]] = None

    def __new__(cls, value: Any):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValidationError(cls.field_name, "must be an integer", value=value)
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(cls.field_name, "must be an integer", value=value) from e
        if number < cls.minimum or (cls.maximum is not None and number > cls.maximum):
            upper = cls.maximum if cls.maximum is not None else "inf"
            raise ValidationError(
                cls.field_name,
                f"must be between {cls.minimum} and {upper}",
                value=value,
                expected=f"{cls.minimum} <= {cls.field_name} <= {upper}",
            )
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)!r})"

    @classmethod
    def _validate(cls, value: Any):
        return value if type(value) is cls else cls(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class Temperature(_BoundedFloat):
    """Amount of randomness injected into the response, 0.0 to 1.0."""

    field_name = "temperature"
    minimum = 0.0
    maximum = 1.0


class TopP(_BoundedFloat):
    """Nucleus sampling cutoff, 0.0 to 1.0."""

    field_name = "top_p"
    minimum = 0.0
    maximum = 1.0


class TopK(_BoundedInt):
    """Only sample from the top K options for each subsequent token."""

    field_name = "top_k"
    minimum = 0


class MaxTokens(_BoundedInt):
    """
    Maximum number of tokens to generate before stopping.

    The lower bound is checked here; the per-model upper bound needs the model,
    so use MaxTokens.for_model() or let MessagesRequestBody check it.
    """

    field_name = "max_tokens"
    minimum = 1

    @classmethod
    def for_model(cls, value: Any, model: ClaudeModel) -> "MaxTokens":
        max_tokens = cls(value)
        max_tokens.check_model(model)
        return max_tokens

    def check_model(self, model: ClaudeModel) -> None:
        if int(self) > model.max_tokens:
            raise ValidationError(
                self.field_name,
                f"exceeds the limit of {model.max_tokens} for {model.value}",
                value=int(self),
                expected=f"1 <= max_tokens <= {model.max_tokens}",
            )


class Metadata(BaseModel):
    """An object describing metadata about the request."""

    model_config = ConfigDict(frozen=True)

    # External identifier for the end user (uuid, hash, ...); never PII
    user_id: Optional[str] = Field(None, description="External user identifier")
