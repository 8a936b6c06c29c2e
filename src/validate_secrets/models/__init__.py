"""
Data models for admission requests, verdicts and workload specifications.
"""

from .admission import (
    AccessVerdict,
    AdmissionRequest,
    AdmissionVerdict,
    GroupVersionKind,
    UserInfo,
)
from .workload import Container, EnvFromSource, EnvVar, Pod, PodSpec, Volume

__all__ = [
    "AccessVerdict",
    "AdmissionRequest",
    "AdmissionVerdict",
    "GroupVersionKind",
    "UserInfo",
    "Container",
    "EnvFromSource",
    "EnvVar",
    "Pod",
    "PodSpec",
    "Volume",
]
