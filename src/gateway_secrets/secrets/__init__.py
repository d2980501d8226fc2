"""Secret synchronization subpackage.

This package contains modules for resolving source secrets, classifying
them by certificate type and projecting them into gateway namespaces.
"""

from gateway_secrets.secrets.classifier import categorize_secrets
from gateway_secrets.secrets.materializer import (
    make_secrets,
    make_target_secret_labels,
    make_wildcard_secrets,
    target_secret_name,
    target_wildcard_secret_name,
)
from gateway_secrets.secrets.resolver import InMemorySecretLister, SecretLister, get_secrets

__all__ = [
    # resolver
    "SecretLister",
    "InMemorySecretLister",
    "get_secrets",
    # classifier
    "categorize_secrets",
    # materializer
    "make_secrets",
    "make_wildcard_secrets",
    "make_target_secret_labels",
    "target_secret_name",
    "target_wildcard_secret_name",
]
