"""
Base schemas with standardized field types for consistent API responses.
"""
from datetime import time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_core import core_schema


class StandardizedModel(BaseModel):
    """Base model with standardized JSON encoding"""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True, from_attributes=True)


class Money(Decimal):
    """Money field: accepts numbers or strings, always two decimal places, serialized as float."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        def validate_money(value: Any) -> Decimal:
            if isinstance(value, float):
                value = str(value)
            try:
                amount = Decimal(value)
            except ArithmeticError as exc:
                raise ValueError(f"Invalid amount: {value!r}") from exc
            if not amount.is_finite():
                raise ValueError("Amount must be a finite number")
            return amount.quantize(Decimal("0.01"))

        return core_schema.no_info_after_validator_function(
            validate_money,
            core_schema.union_schema(
                [
                    core_schema.int_schema(),
                    core_schema.float_schema(),
                    core_schema.str_schema(),
                    core_schema.is_instance_schema(Decimal),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float,
                info_arg=False,
                return_schema=core_schema.float_schema(),
                when_used="json",
            ),
        )


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")
