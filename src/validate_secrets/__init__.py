"""
validate-secrets - A validating admission webhook for Kubernetes.

The webhook rejects workloads that mount or reference secrets the
requesting user is not allowed to read:
- Secrets mounted as volumes
- Secrets exposed through envFrom
- Individual secret keys referenced from environment variables
"""

__version__ = "0.1.0"
