"""
Workload decoders keyed by kind and version.

Each decoder turns the raw object of an admission request into the pod
spec whose secret references are checked. Adding support for another kind
means registering a decoder here; the decision engine is unchanged.
"""

import json
from collections.abc import Callable
from typing import Any

from validate_secrets.constants import POD_KIND, POD_VERSION
from validate_secrets.errors import MalformedPayloadError, UnsupportedKindError
from validate_secrets.models import GroupVersionKind, Pod, PodSpec

WorkloadDecoder = Callable[[Any], PodSpec]

_DECODERS: dict[tuple[str, str], WorkloadDecoder] = {}


def register_decoder(
    kind: str, version: str
) -> Callable[[WorkloadDecoder], WorkloadDecoder]:
    """Register a decoder for objects of ``kind``/``version``."""

    def decorator(func: WorkloadDecoder) -> WorkloadDecoder:
        _DECODERS[(kind, version)] = func
        return func

    return decorator


def get_decoder(gvk: GroupVersionKind) -> WorkloadDecoder:
    """
    Look up the decoder for a kind.

    Raises:
        UnsupportedKindError: If no decoder is registered for the kind/version
    """
    decoder = _DECODERS.get((gvk.kind, gvk.version))
    if decoder is None:
        raise UnsupportedKindError(str(gvk))
    return decoder


def _load_raw(raw: Any) -> Any:
    if isinstance(raw, bytes | bytearray):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


@register_decoder(POD_KIND, POD_VERSION)
def decode_pod(raw: Any) -> PodSpec:
    """Decode a v1 Pod and return its spec."""
    data = _load_raw(raw)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return Pod.model_validate(data).spec


def decode_workload(gvk: GroupVersionKind, raw: Any) -> PodSpec:
    """
    Decode the raw object of an admission request.

    Args:
        gvk: Kind of the object as reported in the admission request
        raw: Raw object (decoded JSON mapping, or JSON bytes/text)

    Returns:
        Pod spec of the workload

    Raises:
        UnsupportedKindError: If the kind is not supported
        MalformedPayloadError: If the object cannot be decoded
    """
    decoder = get_decoder(gvk)
    try:
        return decoder(raw)
    except ValueError as e:
        # pydantic ValidationError and json.JSONDecodeError are ValueErrors
        raise MalformedPayloadError(str(gvk), str(e), cause=e) from e
