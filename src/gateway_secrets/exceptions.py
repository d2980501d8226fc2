"""Custom exceptions for gateway-secret-sync.

This module defines the exception hierarchy used throughout the package.
Every error is terminal for the operation that raised it: nothing is retried
internally and no partial result is returned alongside an error.
"""


class SecretSyncError(Exception):
    """Base exception for all gateway-secret-sync errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all errors with a single except clause.
    """

    pass


class SecretNotFoundError(SecretSyncError):
    """Raised when a referenced source secret does not exist.

    Attributes:
        namespace: Namespace of the missing secret.
        name: Name of the missing secret.

    """

    def __init__(self, namespace: str, name: str) -> None:
        self.namespace = namespace
        self.name = name
        super().__init__(f"Secret '{namespace}/{name}' not found")


class InvalidCertificateError(SecretSyncError):
    """Raised when a secret payload is not a usable certificate.

    This can occur when:
    - The secret has no certificate key
    - The payload is not PEM encoded
    - The PEM block is not a valid X.509 certificate
    - The certificate does not name any host
    """

    pass


class TopologyUnavailableError(SecretSyncError):
    """Raised when the gateway target namespaces cannot be determined.

    This typically means:
    - No ingress gateways are configured
    - A gateway service URL is not of the form <service>.<namespace>...
    """

    pass


class ClusterConnectionError(SecretSyncError):
    """Raised when talking to the Kubernetes cluster fails.

    This can occur when:
    - The kubeconfig is invalid or missing
    - The cluster is unreachable
    - The API server rejects the request
    """

    pass


class ConfigError(SecretSyncError):
    """Raised when an input manifest or topology file cannot be loaded.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The YAML does not have the expected shape
    """

    pass
