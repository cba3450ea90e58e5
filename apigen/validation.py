"""Binding of request parameters to dataclasses driven by ``apivalidator`` tags."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

TAG_KEY = "apivalidator"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_NAMED_TYPES = {"int": int, "str": str}


class ValidationError(ValueError):
    """A request parameter failed validation."""


@dataclass(frozen=True)
class FieldRule:
    """How one dataclass field is read from request parameters and checked."""

    name: str
    kind: type
    param_name: str
    required: bool = False
    enum: tuple[str, ...] = ()
    default: str | None = None
    min: int | None = None
    max: int | None = None

    def bind(self, params: Mapping[str, str]) -> Any:
        """Read, convert and validate this field's value from ``params``."""
        raw = params.get(self.param_name, "")
        if self.required and raw == "":
            raise ValidationError(f"{self.param_name} must me not empty")
        if raw == "" and self.default is not None:
            raw = self.default

        value: Any = raw
        if self.kind is int:
            if raw == "":
                value = 0
            elif _INT_RE.fullmatch(raw):
                value = int(raw)
            else:
                raise ValidationError(f"{self.param_name} must be int")

        if self.enum and str(value) not in self.enum:
            raise ValidationError(
                f"{self.param_name} must be one of [{', '.join(self.enum)}]"
            )

        measured, label = (len(value), "len ") if self.kind is str else (value, "")
        if self.min is not None and measured < self.min:
            raise ValidationError(f"{self.param_name} {label}must be >= {self.min}")
        if self.max is not None and measured > self.max:
            raise ValidationError(f"{self.param_name} {label}must be <= {self.max}")
        return value


def parse_rule(name: str, kind: type, tag: str) -> FieldRule:
    """Build a :class:`FieldRule` from a comma-separated validator tag."""
    if kind not in (int, str):
        raise TypeError(f"field {name!r} has unsupported type {kind!r}")
    options: dict[str, Any] = {"param_name": name.lower()}
    for part in filter(None, (piece.strip() for piece in tag.split(","))):
        key, _, value = part.partition("=")
        match key:
            case "required":
                options["required"] = True
            case "paramname":
                options["param_name"] = value
            case "enum":
                options["enum"] = tuple(value.split("|"))
            case "default":
                options["default"] = value
            case "min" | "max":
                options[key] = int(value)
            case _:
                raise ValueError(f"unknown validator option {key!r} on field {name!r}")
    return FieldRule(name=name, kind=kind, **options)


def param(tag: str = "", *, default: Any = dataclasses.MISSING) -> Any:
    """Declare a dataclass field carrying a validator tag."""
    return dataclasses.field(default=default, metadata={TAG_KEY: tag})


@lru_cache(maxsize=None)
def _rules(cls: type) -> tuple[FieldRule, ...]:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass")
    return tuple(
        parse_rule(
            field.name,
            _NAMED_TYPES.get(field.type.strip(), field.type)
            if isinstance(field.type, str)
            else field.type,
            field.metadata.get(TAG_KEY, ""),
        )
        for field in dataclasses.fields(cls)
        if field.init
    )


def bind_params(cls: type, params: Mapping[str, str]) -> Any:
    """Create an instance of dataclass ``cls`` from request parameters."""
    return cls(**{rule.name: rule.bind(params) for rule in _rules(cls)})