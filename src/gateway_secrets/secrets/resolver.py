"""Source secret resolution.

This module looks up the secrets referenced by the TLS declarations
of a routing resource.
"""

from collections.abc import Mapping
from typing import Protocol

from icecream import ic

from gateway_secrets.exceptions import SecretNotFoundError
from gateway_secrets.models import Credential, RoutingResource, SourceKey


class SecretLister(Protocol):
    """Read access to secrets keyed by namespace and name."""

    def get(self, namespace: str, name: str) -> Credential:
        """Return the secret or raise SecretNotFoundError."""
        ...


class InMemorySecretLister:
    """SecretLister backed by a plain mapping, used offline and in tests."""

    def __init__(self, secrets: Mapping[SourceKey, Credential] | None = None) -> None:
        self._secrets: dict[SourceKey, Credential] = dict(secrets or {})

    @classmethod
    def from_credentials(cls, *credentials: Credential) -> "InMemorySecretLister":
        """Build a lister holding the given secrets."""
        return cls({credential.key: credential for credential in credentials})

    def add(self, credential: Credential) -> None:
        """Add or replace a secret."""
        self._secrets[credential.key] = credential

    def get(self, namespace: str, name: str) -> Credential:
        try:
            return self._secrets[SourceKey(namespace=namespace, name=name)]
        except KeyError:
            raise SecretNotFoundError(namespace, name) from None

    def __len__(self) -> int:
        return len(self._secrets)


def get_secrets(routing_resource: RoutingResource, lister: SecretLister) -> dict[SourceKey, Credential]:
    """Fetch every secret referenced by a routing resource's TLS declarations.

    Declarations that share a secret resolve to a single entry.

    Args:
        routing_resource: The resource whose TLS declarations are resolved.
        lister: Lookup capability for secrets.

    Returns:
        Mapping of SourceKey to the referenced secret.

    Raises:
        SecretNotFoundError: If any referenced secret does not exist. No
            partial result is returned.

    """
    secrets: dict[SourceKey, Credential] = {}
    for tls in routing_resource.tls:
        key = tls.secret_key
        if key in secrets:
            continue
        secrets[key] = lister.get(key.namespace, key.name)

    ic([str(key) for key in secrets])
    return secrets
