"""
Validating admission webhook for secret access.

The webhook is registered for pod creation through a
ValidatingWebhookConfiguration. The API server posts an AdmissionReview to
``/validate``; the review is decoded, decided and answered with an
AdmissionReview carrying the verdict.
"""
