"""
Service layer for admission decisions.

- decoders: kind/version dispatch from raw objects to pod specs
- decision_engine: the admission decision for one request
"""

from .decision_engine import AdmissionDecisionEngine
from .decoders import decode_workload, register_decoder

__all__ = [
    "AdmissionDecisionEngine",
    "decode_workload",
    "register_decoder",
]
