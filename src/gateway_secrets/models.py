"""Data models for gateway-secret-sync.

This module provides type-safe data structures for secrets, ingress TLS
declarations and the gateway topology, replacing loosely-typed dictionaries
with proper Python data classes.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from gateway_secrets.exceptions import TopologyUnavailableError

# Labels recording which source secret a synchronized secret was copied from
ORIGIN_SECRET_NAME_LABEL_KEY = "networking.internal.knative.dev/originSecretName"
ORIGIN_SECRET_NAMESPACE_LABEL_KEY = "networking.internal.knative.dev/originSecretNamespace"

# Well-known data keys of kubernetes.io/tls secrets
TLS_CERT_KEY = "tls.crt"
TLS_PRIVATE_KEY_KEY = "tls.key"


class SourceKey(NamedTuple):
    """Composite identity of a secret.

    Equality, hashing and ordering are structural over (namespace, name),
    so a '/' inside either part can never make two keys collide.

    Attributes:
        namespace: The secret namespace.
        name: The secret name.

    """

    namespace: str
    name: str

    @classmethod
    def parse(cls, value: str) -> "SourceKey":
        """Build a key from its 'namespace/name' display form.

        Args:
            value: String of the form 'namespace/name'.

        Returns:
            The parsed SourceKey.

        Raises:
            ValueError: If the value has no '/' or an empty part.

        """
        namespace, sep, name = value.partition("/")
        if not sep or not namespace or not name:
            raise ValueError(f"Expected 'namespace/name', got '{value}'")
        return cls(namespace=namespace, name=name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class Credential:
    """A namespaced bundle of opaque secret data.

    Attributes:
        namespace: The Kubernetes namespace of the secret.
        name: The secret name.
        data: Mapping of data key to raw (decoded) bytes.
        labels: Secret labels.
        uid: The object UID, empty for synthesized secrets.

    """

    namespace: str
    name: str
    data: dict[str, bytes] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    uid: str = ""

    @property
    def key(self) -> SourceKey:
        """The SourceKey identifying this secret."""
        return SourceKey(namespace=self.namespace, name=self.name)


@dataclass(frozen=True, slots=True)
class IngressTLS:
    """A TLS declaration binding hosts to one source secret.

    Attributes:
        hosts: Hosts served with the referenced secret.
        secret_name: Name of the referenced secret.
        secret_namespace: Namespace of the referenced secret.

    """

    hosts: tuple[str, ...]
    secret_name: str
    secret_namespace: str

    def __post_init__(self) -> None:
        if not self.hosts:
            raise ValueError(f"TLS declaration for '{self.secret_namespace}/{self.secret_name}' has no hosts")

    @property
    def secret_key(self) -> SourceKey:
        """The SourceKey of the referenced secret."""
        return SourceKey(namespace=self.secret_namespace, name=self.secret_name)


@dataclass(frozen=True, slots=True)
class RoutingResource:
    """An ingress-like resource declaring TLS bindings.

    Attributes:
        namespace: The resource namespace.
        name: The resource name.
        tls: Ordered TLS declarations.

    """

    namespace: str
    name: str
    tls: tuple[IngressTLS, ...] = ()


@dataclass(frozen=True, slots=True)
class Gateway:
    """An ingress gateway reachable through a cluster service.

    Attributes:
        name: The gateway name.
        service_url: Service address, e.g. 'istio-ingressgateway.istio-system.svc.cluster.local'.

    """

    name: str
    service_url: str

    @property
    def namespace(self) -> str:
        """The namespace of the gateway service.

        Raises:
            TopologyUnavailableError: If the service URL has no namespace label.

        """
        parts = self.service_url.split(".", 2)
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise TopologyUnavailableError(
                f"Unexpected service URL form for gateway '{self.name}': '{self.service_url}'"
            )
        return parts[1]


@dataclass(frozen=True, slots=True)
class GatewayTopology:
    """The set of gateways that serve TLS for routing resources."""

    gateways: tuple[Gateway, ...] = ()

    def target_namespaces(self) -> list[str]:
        """Return the namespaces synchronized secrets must exist in.

        Returns:
            Sorted, de-duplicated namespace names.

        Raises:
            TopologyUnavailableError: If no gateway is configured or a
                gateway service URL is malformed.

        """
        if not self.gateways:
            raise TopologyUnavailableError("No ingress gateways configured")
        return sorted({gateway.namespace for gateway in self.gateways})


class ClassificationResult(NamedTuple):
    """Secrets partitioned by whether their certificate is a wildcard.

    Attributes:
        non_wildcard: Secrets whose certificate names no wildcard host.
        wildcard: Secrets whose certificate names at least one wildcard host.

    """

    non_wildcard: dict[SourceKey, Credential]
    wildcard: dict[SourceKey, Credential]
