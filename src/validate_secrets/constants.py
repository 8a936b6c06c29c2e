"""
Constants used throughout the secret access webhook.

This module defines:
- The service identities of built-in workload controllers
- The workload kinds the webhook understands
- Admission envelope constants
- Error message templates
"""

# Built-in controllers create pods on behalf of a user whose access was
# already checked when the owning object was admitted.
CONTROLLER_SERVICE_ACCOUNTS = frozenset(
    {
        "system:serviceaccount:kube-system:cronjob-controller",
        "system:serviceaccount:kube-system:daemon-set-controller",
        "system:serviceaccount:kube-system:deployment-controller",
        "system:serviceaccount:kube-system:job-controller",
        "system:serviceaccount:kube-system:replicaset-controller",
        "system:serviceaccount:kube-system:replication-controller",
        "system:serviceaccount:kube-system:statefulset-controller",
    }
)

# Supported workload kinds
POD_KIND = "Pod"
POD_VERSION = "v1"

# Subject access review attributes
SECRET_RESOURCE = "secrets"
SECRET_READ_VERB = "get"
CORE_API_GROUP = ""

# Admission review envelope
ADMISSION_API_VERSION = "admission.k8s.io/v1"
SUPPORTED_ADMISSION_API_VERSIONS = frozenset(
    {"admission.k8s.io/v1", "admission.k8s.io/v1beta1"}
)
ADMISSION_REVIEW_KIND = "AdmissionReview"

# HTTP status codes reported in the admission response status
STATUS_CODE_BAD_REQUEST = 400
STATUS_CODE_FORBIDDEN = 403
STATUS_CODE_INTERNAL_ERROR = 500

# Default server configuration (matches the flags of the deployment manifests)
DEFAULT_WEBHOOK_PORT = 8443
DEFAULT_TLS_CERT_FILE = "/etc/webhook/cert.pem"
DEFAULT_TLS_PRIVATE_KEY_FILE = "/etc/webhook/key.pem"
DEFAULT_SAR_TIMEOUT_SECONDS = 10.0
# Reviews carry object and oldObject, each up to the 1.5 MiB etcd limit
DEFAULT_MAX_REQUEST_BYTES = 4 * 1024 * 1024

# HTTP routes
VALIDATE_PATH = "/validate"
READYZ_PATH = "/readyz"
HEALTHZ_PATH = "/healthz"
METRICS_PATH = "/metrics"

# Error message templates
ERROR_UNSUPPORTED_KIND = "unsupported kind received: {}"
ERROR_MALFORMED_PAYLOAD = "could not interpret workload object of kind {}: {}"
ERROR_CHECKING_PERMISSIONS = "checking permissions failed: {}"
ERROR_SECRET_ACCESS_DENIED = (
    'User "{}" does not have access to the secret "{}" in the namespace "{}".'
)
ERROR_MALFORMED_REVIEW = "decoding request: {}"
ERROR_INTERNAL = "internal error while validating secret access: {}"
