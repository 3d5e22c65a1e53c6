"""Post-processing controls.

A record carries these flags as an opaque JSON string. An enrichment stage
running after the flush reads them to decide what context to fetch (user
info, related objects, deploy history and so on). Nothing in logweave
evaluates them.
"""

from __future__ import annotations

import json

from pydantic import Field

from .base import LogweaveBaseModel


class PostProcessingControls(LogweaveBaseModel):
    """The nine enrichment flags, all off by default."""

    stack_trace: bool = Field(default=False, alias="stackTrace")
    user_info: bool = Field(default=False, alias="userInfo")
    object_info: bool = Field(default=False, alias="objectInfo")
    related_objects: bool = Field(default=False, alias="relatedObjects")
    deploy_result: bool = Field(default=False, alias="deployResult")
    audit_trail: bool = Field(default=False, alias="auditTrail")
    pending_jobs: bool = Field(default=False, alias="pendingJobs")
    total_active_session: bool = Field(default=False, alias="totalActiveSession")
    installed_packages: bool = Field(default=False, alias="installedPackages")

    def to_json(self) -> str:
        """Encode with the camelCase flag names."""
        return json.dumps(self.model_dump(by_alias=True))


class PostProcessingControlsBuilder:
    """Fluent builder for PostProcessingControls.

    Usage:
        controls = PostProcessingControlsBuilder().stack_trace().user_info().to_json()
    """

    def __init__(self) -> None:
        self._flags: dict[str, bool] = dict.fromkeys(PostProcessingControls.model_fields, False)

    def _set(self, name: str, value: bool) -> PostProcessingControlsBuilder:
        self._flags[name] = value
        return self

    def stack_trace(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("stack_trace", value)

    def user_info(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("user_info", value)

    def object_info(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("object_info", value)

    def related_objects(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("related_objects", value)

    def deploy_result(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("deploy_result", value)

    def audit_trail(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("audit_trail", value)

    def pending_jobs(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("pending_jobs", value)

    def total_active_session(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("total_active_session", value)

    def installed_packages(self, value: bool = True) -> PostProcessingControlsBuilder:
        return self._set("installed_packages", value)

    def set_all(self, value: bool = True) -> PostProcessingControlsBuilder:
        """Set every flag at once."""
        for name in self._flags:
            self._flags[name] = value
        return self

    def build(self) -> PostProcessingControls:
        return PostProcessingControls(**self._flags)

    def to_json(self) -> str:
        return self.build().to_json()
