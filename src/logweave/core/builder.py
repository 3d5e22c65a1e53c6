"""Fluent accumulator for a single LogRecord."""

from __future__ import annotations

import copy
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any

from logweave.exceptions import BuilderConsumedError
from logweave.models.post_processing import (
    PostProcessingControls,
    PostProcessingControlsBuilder,
)
from logweave.models.record import LogRecord
from logweave.models.taxonomy import Area, Category, Level, LogType, SystemAttribute, text


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


class LogBuilder:
    """Assembles one record.

    Every setter returns the builder so calls chain. build() substitutes
    defaults for missing classification and never validates beyond that.
    A builder yields exactly one record; create a new one per record.

    Usage:
        record = (
            LogBuilder()
            .category(Category.APPLICATION)
            .type(LogType.BACKEND)
            .area(Area.ACCOUNTS)
            .summary("Account sync failed")
            .attribute("account_id", "001xx")
            .build()
        )
    """

    def __init__(
        self,
        default_type: str = LogType.BACKEND.value,
        default_area: str = Area.GENERAL.value,
    ) -> None:
        self._default_type = default_type
        self._default_area = default_area
        self._fields: dict[str, Any] = {}
        self._attributes: dict[str, Any] = {}
        self._built = False

    def _set(self, name: str, value: Any) -> LogBuilder:
        if self._built:
            raise BuilderConsumedError()
        self._fields[name] = value
        return self

    def category(self, value: Category | str | None) -> LogBuilder:
        return self._set("category", Category.parse(value))

    def type(self, value: LogType | str | None) -> LogBuilder:
        return self._set("type", text(value))

    def area(self, value: Area | str | None) -> LogBuilder:
        return self._set("area", text(value))

    def level(self, value: Level | str | None) -> LogBuilder:
        return self._set("level", Level.parse(value, Level.INFO))

    def summary(self, value: str | None) -> LogBuilder:
        return self._set("summary", value)

    def details(self, value: str | None) -> LogBuilder:
        return self._set("details", value)

    def stack_trace(self, value: str | None) -> LogBuilder:
        return self._set("stack_trace", value)

    def transaction_id(self, value: str | None) -> LogBuilder:
        return self._set("transaction_id", value or None)

    def created_timestamp(self, value: int | None) -> LogBuilder:
        return self._set("created_timestamp", value)

    def duration(self, value: float | None) -> LogBuilder:
        return self._set("duration", value)

    def post_processing(
        self,
        value: str | PostProcessingControls | PostProcessingControlsBuilder | None,
    ) -> LogBuilder:
        """Attach post-processing controls, as JSON text or a controls object."""
        if isinstance(value, (PostProcessingControls, PostProcessingControlsBuilder)):
            value = value.to_json()
        return self._set("post_processing", value)

    def create_issue(self, value: bool = True) -> LogBuilder:
        return self._set("create_issue", value)

    def attribute(self, name: str | Enum, value: Any) -> LogBuilder:
        """Upsert one attribute. Keys are case-sensitive; last write wins."""
        if self._built:
            raise BuilderConsumedError()
        key = name.value if isinstance(name, Enum) else name
        self._attributes[key] = value
        return self

    def attributes(self, values: Mapping[str, Any]) -> LogBuilder:
        for name, value in values.items():
            self.attribute(name, value)
        return self

    def related_object(self, record_id: str | None) -> LogBuilder:
        if not record_id:
            return self
        return self.attribute(SystemAttribute.RELATED_OBJECT_ID, record_id)

    def get(self, name: str) -> Any:
        """Current value of a field, None if unset."""
        return self._fields.get(name)

    def copy(self) -> LogBuilder:
        """Independent, unbuilt copy carrying the same fields and attributes."""
        clone = LogBuilder(self._default_type, self._default_area)
        clone._fields = copy.deepcopy(self._fields)
        clone._attributes = copy.deepcopy(self._attributes)
        return clone

    def build(self) -> LogRecord:
        if self._built:
            raise BuilderConsumedError()
        self._built = True

        fields = self._fields
        created = fields.get("created_timestamp")
        return LogRecord(
            category=fields.get("category") or Category.APPLICATION,
            type=fields.get("type") or self._default_type,
            area=fields.get("area") or self._default_area,
            level=fields.get("level") or Level.INFO,
            summary=fields.get("summary"),
            details=fields.get("details"),
            stack_trace=fields.get("stack_trace"),
            transaction_id=fields.get("transaction_id"),
            created_timestamp=created if created is not None else now_millis(),
            duration=fields.get("duration"),
            post_processing=fields.get("post_processing"),
            attributes=dict(self._attributes),
            create_issue=bool(fields.get("create_issue", False)),
        )
