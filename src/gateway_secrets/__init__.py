"""gateway-secret-sync: TLS secret synchronization for ingress gateways.

This package resolves the TLS secrets referenced by an ingress, sorts them
into wildcard and non-wildcard certificates and builds the copies that
have to exist in the namespaces of the ingress gateways.

Example usage:
    from gateway_secrets import (
        GatewayTopology,
        InMemorySecretLister,
        categorize_secrets,
        get_secrets,
        make_secrets,
    )

    secrets = get_secrets(ingress, lister)
    classified = categorize_secrets(secrets)
    targets = make_secrets(classified.non_wildcard, topology)
"""

__version__ = "0.1.0"

from gateway_secrets.certificates import (
    generate_certificate,
    get_hosts_from_cert_secret,
    get_hosts_from_pem,
    is_wildcard_host,
)
from gateway_secrets.exceptions import (
    ClusterConnectionError,
    ConfigError,
    InvalidCertificateError,
    SecretNotFoundError,
    SecretSyncError,
    TopologyUnavailableError,
)
from gateway_secrets.models import (
    ORIGIN_SECRET_NAME_LABEL_KEY,
    ORIGIN_SECRET_NAMESPACE_LABEL_KEY,
    ClassificationResult,
    Credential,
    Gateway,
    GatewayTopology,
    IngressTLS,
    RoutingResource,
    SourceKey,
)
from gateway_secrets.secrets import (
    InMemorySecretLister,
    SecretLister,
    categorize_secrets,
    get_secrets,
    make_secrets,
    make_wildcard_secrets,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "SourceKey",
    "Credential",
    "IngressTLS",
    "RoutingResource",
    "Gateway",
    "GatewayTopology",
    "ClassificationResult",
    "ORIGIN_SECRET_NAME_LABEL_KEY",
    "ORIGIN_SECRET_NAMESPACE_LABEL_KEY",
    # Certificates
    "get_hosts_from_pem",
    "get_hosts_from_cert_secret",
    "is_wildcard_host",
    "generate_certificate",
    # Secrets
    "SecretLister",
    "InMemorySecretLister",
    "get_secrets",
    "categorize_secrets",
    "make_secrets",
    "make_wildcard_secrets",
    # Exceptions
    "SecretSyncError",
    "SecretNotFoundError",
    "InvalidCertificateError",
    "TopologyUnavailableError",
    "ClusterConnectionError",
    "ConfigError",
]
