"""Column Type Registry - type handlers that check and coerce row values"""

import math
import re
from datetime import date, datetime
from typing import Any, Dict, Optional, Type

from pydantic import AnyHttpUrl, EmailStr, TypeAdapter, ValidationError

from core.logging_config import get_logger
from schemas.column_schema import ColumnConfig, ColumnType, FieldError

logger = get_logger(__name__)

INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')
DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(AnyHttpUrl)


class ColumnValueError(Exception):
    """Raised by a handler when a value does not fit the column type"""

    def __init__(self, error: FieldError):
        super().__init__(error.message)
        self.error = error


class ColumnTypeHandler:
    """
    Base class for column types.

    Subclasses are registered with @column_type and looked up by handle.
    ``coerce`` returns the value to store or raises ColumnValueError.
    """
    handle: str = ""
    label: str = ""
    description: str = ""

    def coerce(self, key: str, value: Any, config: ColumnConfig) -> Any:
        return value

    def fail(self, key: str, expected: str):
        raise ColumnValueError(FieldError.invalid_type(key, expected))


_registered_handlers: Dict[str, Type[ColumnTypeHandler]] = {}


def column_type(handle: ColumnType, label: str, description: str = ""):
    """Class decorator registering a handler for a column type handle"""
    def decorator(cls: Type[ColumnTypeHandler]) -> Type[ColumnTypeHandler]:
        cls.handle = handle.value
        cls.label = label
        cls.description = description
        _registered_handlers[handle.value] = cls
        return cls
    return decorator


@column_type(ColumnType.TEXT, "Text", "Single line of text")
class TextColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if not isinstance(value, str):
            self.fail(key, "a string")
        return value


@column_type(ColumnType.TEXTAREA, "Text area", "Multi-line text")
class TextareaColumn(TextColumn):
    pass


@column_type(ColumnType.NUMBER, "Number", "Integer or decimal number")
class NumberColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if isinstance(value, bool):
            self.fail(key, "a number")
        if isinstance(value, (int, float)):
            number = value
        elif isinstance(value, str):
            text = value.strip()
            try:
                number = int(text) if INTEGER_PATTERN.match(text) else float(text)
            except ValueError:
                self.fail(key, "a number")
        else:
            self.fail(key, "a number")
        if isinstance(number, float) and not math.isfinite(number):
            self.fail(key, "a finite number")
        return number


@column_type(ColumnType.EMAIL, "Email", "Email address")
class EmailColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if not isinstance(value, str):
            self.fail(key, "an email address")
        try:
            _email_adapter.validate_python(value)
        except ValidationError:
            self.fail(key, "a valid email address")
        return value


@column_type(ColumnType.URL, "URL", "http(s) link")
class UrlColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if not isinstance(value, str):
            self.fail(key, "a URL")
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            self.fail(key, "a valid http(s) URL")
        return value


@column_type(ColumnType.DATE, "Date", "Calendar date, YYYY-MM-DD")
class DateColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            self.fail(key, "a date in YYYY-MM-DD format")
        try:
            date.fromisoformat(value)
        except ValueError:
            self.fail(key, "a valid calendar date")
        return value


@column_type(ColumnType.DATETIME, "Date & time", "ISO 8601 timestamp")
class DateTimeColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if not isinstance(value, str):
            self.fail(key, "an ISO 8601 datetime")
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            self.fail(key, "a valid ISO 8601 datetime")
        return value


@column_type(ColumnType.BOOLEAN, "Yes / No", "true or false")
class BooleanColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        self.fail(key, "true or false")


@column_type(ColumnType.SELECT, "Select", "One (or with multiple: true, several) of the configured options")
class SelectColumn(ColumnTypeHandler):
    def coerce(self, key, value, config):
        allowed = config.option_values()
        if config.multiple:
            if not isinstance(value, list):
                self.fail(key, "a list of options")
            values = value
        else:
            if isinstance(value, (list, dict)):
                self.fail(key, "a single option")
            values = [value]

        # Without a declared option set any scalar is accepted
        if allowed is not None:
            for item in values:
                if item not in allowed:
                    raise ColumnValueError(FieldError.invalid_option(key, allowed))
        return value


class ColumnTypeRegistry:
    """Registry of column type handlers, keyed by type handle"""
    _instance: Optional['ColumnTypeRegistry'] = None
    _handlers: Dict[str, ColumnTypeHandler]
    _loaded: bool

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._handlers = {}
            instance._loaded = False
            cls._instance = instance
        return cls._instance

    def load_column_types(self) -> None:
        if self._loaded:
            return
        for handle, handler_class in _registered_handlers.items():
            self._handlers[handle] = handler_class()
            logger.debug(f"Registered column type: {handle} ({handler_class.label})")
        self._loaded = True
        logger.info(f"Loaded {len(self._handlers)} column types")

    def get_handler(self, handle: str) -> Optional[ColumnTypeHandler]:
        if not self._loaded:
            self.load_column_types()
        if isinstance(handle, ColumnType):
            handle = handle.value
        return self._handlers.get(handle)

    def get_all_handlers(self) -> Dict[str, ColumnTypeHandler]:
        if not self._loaded:
            self.load_column_types()
        return self._handlers.copy()

    def column_type_exists(self, handle: str) -> bool:
        return self.get_handler(handle) is not None


_column_type_registry: Optional[ColumnTypeRegistry] = None


def get_column_type_registry() -> ColumnTypeRegistry:
    """Get the singleton ColumnTypeRegistry instance"""
    global _column_type_registry
    if _column_type_registry is None:
        _column_type_registry = ColumnTypeRegistry()
        _column_type_registry.load_column_types()
    return _column_type_registry
