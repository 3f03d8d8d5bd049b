"""Resource models and error types for the Cloud Storage JSON API: buckets, ACLs and IAM policies."""

__version__ = "0.1.0"

__all__ = [
    "bucket",
    "bucket_access_control",
    "bucket_config",
    "common",
    "errors",
    "iam",
]