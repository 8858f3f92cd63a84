"""Option-driven configuration for field diff plugins, validated through pydantic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ValidationError, create_model

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class OptionKind(StrEnum):
    CHECKBOX = "checkbox"
    SELECT = "select"


@dataclass(frozen=True)
class ConfigOption:
    """One configurable setting of a plugin."""

    name: str
    title: str
    kind: OptionKind
    default: Any
    choices: Mapping[str, str] = field(default_factory=dict)
    description: str = ""
    weight: int = 0

    def field_definition(self) -> tuple[Any, Any]:
        """Annotation and default of this option in a submitted form.

        An unchecked checkbox is simply missing from a submission, so a
        checkbox defaults to ``False`` there.
        """
        if self.kind is OptionKind.CHECKBOX:
            return bool, False
        return Literal[tuple(self.choices)], self.default


@dataclass(frozen=True)
class FormElement:
    """Template-friendly description of one form input."""

    name: str
    type: str
    title: str
    default_value: Any
    options: Mapping[str, str] = field(default_factory=dict)
    description: str = ""
    weight: int = 0


def form_errors(exc: ValidationError, titles: Mapping[str, str]) -> dict[str, str]:
    """Map a pydantic validation error to field name → message."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__root__"
        errors[name] = f"{titles.get(name, name)}: {error['msg']}"
    return errors


class ConfigurablePlugin:
    """A plugin whose settings are described by a list of options."""

    def __init__(
        self,
        plugin_id: str,
        label: str,
        options: Sequence[ConfigOption] = (),
        configuration: Mapping[str, Any] | None = None,
    ) -> None:
        self.plugin_id = plugin_id
        self.label = label
        self._options = tuple(options)
        self._form_model = create_model(
            f"{type(self).__name__}Form",
            **{option.name: option.field_definition() for option in self._options},
        )
        self.configuration: dict[str, Any] = {
            **self.default_config(),
            **(configuration or {}),
        }

    @property
    def options(self) -> tuple[ConfigOption, ...]:
        return self._options

    @property
    def form_model(self) -> type[BaseModel]:
        return self._form_model

    def default_config(self) -> dict[str, Any]:
        return {option.name: option.default for option in self._options}

    def build_config_form(self) -> list[FormElement]:
        elements = [
            FormElement(
                name=option.name,
                type=option.kind.value,
                title=option.title,
                default_value=self.configuration.get(option.name, option.default),
                options=option.choices,
                description=option.description,
                weight=option.weight,
            )
            for option in self._options
        ]
        return sorted(elements, key=lambda element: element.weight)

    def parse_form(self, values: Mapping[str, Any]) -> BaseModel:
        """Validate submitted values, raising ``ValidationError`` when invalid."""
        submitted = {
            option.name: values[option.name] for option in self._options if option.name in values
        }
        return self._form_model.model_validate(submitted)

    def form_errors(self, exc: ValidationError) -> dict[str, str]:
        return form_errors(exc, {option.name: option.title for option in self._options})

    def validate(self, values: Mapping[str, Any]) -> dict[str, str]:
        """Return option name → error message for every invalid value."""
        try:
            self.parse_form(values)
        except ValidationError as exc:
            return self.form_errors(exc)
        return {}

    def apply(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Update and return the configuration from submitted values."""
        self.configuration.update(self.parse_form(values).model_dump())
        return dict(self.configuration)
