"""
Models for admission requests and the verdicts returned for them.

These mirror the ``admission.k8s.io/v1`` AdmissionRequest and
AdmissionResponse shapes, restricted to the fields the webhook reads or
writes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GroupVersionKind(BaseModel):
    """Fully-qualified kind of an object."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    group: str = ""
    version: str = ""
    kind: str = ""

    def __str__(self) -> str:
        if self.group:
            return f"{self.kind}.{self.group}/{self.version}"
        return f"{self.kind}/{self.version}"


class UserInfo(BaseModel):
    """Identity of the user making the request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str = ""
    uid: str = ""
    groups: list[str] = Field(default_factory=list)


class AdmissionRequest(BaseModel):
    """
    A single admission request.

    ``object`` is the raw workload payload, kept opaque until a decoder for
    ``kind`` interprets it. It is usually the decoded JSON mapping from the
    AdmissionReview envelope, but JSON bytes or text are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uid: str
    kind: GroupVersionKind = Field(default_factory=GroupVersionKind)
    namespace: str = ""
    name: str = ""
    operation: str = ""
    user_info: UserInfo = Field(default_factory=UserInfo, alias="userInfo")
    object: Any = None
    dry_run: bool = Field(False, alias="dryRun")

    @property
    def identity(self) -> str:
        """Username the request is evaluated for."""
        return self.user_info.username


class AccessVerdict(BaseModel):
    """Result of a single secret access check."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None


class AdmissionVerdict(BaseModel):
    """
    Decision for one admission request.

    ``uid`` always equals the request's uid. ``message`` is empty when the
    request is allowed.
    """

    model_config = ConfigDict(frozen=True)

    uid: str
    allowed: bool
    message: str = ""
    code: int | None = None

    @classmethod
    def allow(cls, uid: str) -> "AdmissionVerdict":
        return cls(uid=uid, allowed=True)

    @classmethod
    def deny(cls, uid: str, message: str, code: int) -> "AdmissionVerdict":
        return cls(uid=uid, allowed=False, message=message, code=code)
