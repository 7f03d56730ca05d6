"""Column schema value types - the typed view of a column's free-form JSON"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, ValidationError


class ColumnType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    URL = "url"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    SELECT = "select"


FieldErrorCode = Literal["missing_field", "invalid_type", "invalid_option", "rule_violation", "unknown_key"]


class FieldError(BaseModel):
    """One problem with one key of a row payload"""
    key: str
    code: FieldErrorCode
    rule: Optional[str] = None
    message: str

    @classmethod
    def missing_field(cls, key: str) -> "FieldError":
        return cls(key=key, code="missing_field", message=f"Missing required field: {key}")

    @classmethod
    def invalid_type(cls, key: str, expected: str) -> "FieldError":
        return cls(key=key, code="invalid_type", message=f"{key} must be {expected}")

    @classmethod
    def invalid_option(cls, key: str, options: list) -> "FieldError":
        return cls(key=key, code="invalid_option", message=f"{key} must be one of {options}")

    @classmethod
    def rule_violation(cls, key: str, rule: str, message: str) -> "FieldError":
        return cls(key=key, code="rule_violation", rule=rule, message=message)

    @classmethod
    def unknown_key(cls, key: str) -> "FieldError":
        return cls(key=key, code="unknown_key", message=f"Unknown field: {key}")


class ValidationRules(BaseModel):
    """
    Extra predicates declared on a column.

    Both camelCase (as stored by the admin UI) and snake_case names are
    accepted. Unrecognised rules are kept but not evaluated.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    min: Optional[Any] = None
    max: Optional[Any] = None
    min_length: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("min_length", "minLength"))
    max_length: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("max_length", "maxLength"))
    pattern: Optional[str] = None


class SelectOption(BaseModel):
    value: Any
    label: Optional[str] = None


class ColumnConfig(BaseModel):
    """Per-column configuration, mostly consumed by the UI"""
    model_config = ConfigDict(extra="allow")

    options: Optional[list[SelectOption]] = None
    multiple: bool = False
    placeholder: Optional[str] = None

    @classmethod
    def parse(cls, raw: Optional[dict]) -> "ColumnConfig":
        raw = dict(raw or {})
        options = raw.get("options")
        if isinstance(options, list):
            raw["options"] = [
                option if isinstance(option, dict) and "value" in option else {"value": option}
                for option in options
            ]
        return cls.model_validate(raw)

    def option_values(self) -> Optional[list]:
        if self.options is None:
            return None
        return [option.value for option in self.options]


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail["loc"])
    return f"{location}: {detail['msg']}" if location else detail["msg"]


def _check_rules(value: dict) -> dict:
    try:
        ValidationRules.model_validate(value)
    except ValidationError as e:
        raise ValueError(f"invalid validation rule {_first_error(e)}") from e
    return value


def _check_config(value: dict) -> dict:
    try:
        ColumnConfig.parse(value)
    except ValidationError as e:
        raise ValueError(f"invalid column config {_first_error(e)}") from e
    return value


# Stored as plain JSON, but must parse into ValidationRules / ColumnConfig
RulesDict = Annotated[dict, AfterValidator(_check_rules)]
ColumnConfigDict = Annotated[dict, AfterValidator(_check_config)]


class ColumnSchema(BaseModel):
    """A column as seen by the schema engine"""
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str = ""
    type: ColumnType
    required: bool = False
    validation_rules: Optional[dict] = None
    config: Optional[dict] = None

    @property
    def rules(self) -> ValidationRules:
        return ValidationRules.model_validate(self.validation_rules or {})

    @property
    def settings(self) -> ColumnConfig:
        return ColumnConfig.parse(self.config)


class ColumnTypeRead(BaseModel):
    handle: ColumnType
    label: str
    description: str = ""
