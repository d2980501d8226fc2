"""Projection of source secrets into gateway namespaces.

Two naming policies are supported:

- Per-ingress secrets are named 'ingress-<source uid>' and labeled with
  the origin secret name and namespace.
- Wildcard secrets are shared between ingresses, so they carry no origin
  labels and are named after a hash of the source identity.

The two name spaces use distinct prefixes and can never collide.
"""

import hashlib
from collections.abc import Callable, Mapping

from icecream import ic

from gateway_secrets.models import (
    ORIGIN_SECRET_NAME_LABEL_KEY,
    ORIGIN_SECRET_NAMESPACE_LABEL_KEY,
    Credential,
    GatewayTopology,
    SourceKey,
)

_INGRESS_SECRET_PREFIX = "ingress-"
_WILDCARD_SECRET_PREFIX = "wildcard-"
# Hex characters of the sha256 digest kept in wildcard names
_WILDCARD_HASH_LENGTH = 32


def make_target_secret_labels(name: str, namespace: str) -> dict[str, str]:
    """Return the origin labels for a secret copied from name/namespace."""
    return {
        ORIGIN_SECRET_NAME_LABEL_KEY: name,
        ORIGIN_SECRET_NAMESPACE_LABEL_KEY: namespace,
    }


def target_secret_name(source: Credential) -> str:
    """Return the per-ingress target name of a source secret.

    Raises:
        ValueError: If the source secret has no UID.

    """
    if not source.uid:
        raise ValueError(f"Secret '{source.key}' has no UID")
    return f"{_INGRESS_SECRET_PREFIX}{source.uid}"


def target_wildcard_secret_name(name: str, namespace: str) -> str:
    """Return the wildcard target name of a source secret.

    The name is a pure function of (name, namespace) and is stable across
    processes. A NUL separator keeps ('a-b', 'c') and ('a', 'b-c') apart.
    """
    digest = hashlib.sha256(f"{namespace}\0{name}".encode()).hexdigest()
    return f"{_WILDCARD_SECRET_PREFIX}{digest[:_WILDCARD_HASH_LENGTH]}"


def _make_secret(source: Credential, name: str, namespace: str, labels: dict[str, str]) -> Credential:
    return Credential(
        namespace=namespace,
        name=name,
        data=dict(source.data),
        labels=labels,
    )


def _project(
    origin_secrets: Mapping[SourceKey, Credential],
    topology: GatewayTopology,
    build: Callable[[Credential, str], Credential],
) -> list[Credential]:
    namespaces = topology.target_namespaces()
    ic(namespaces)

    secrets: list[Credential] = []
    for source in sorted(origin_secrets.values(), key=lambda secret: secret.key):
        for namespace in namespaces:
            # No self-copy
            if namespace == source.namespace:
                continue
            secrets.append(build(source, namespace))

    ic([str(secret.key) for secret in secrets])
    return secrets


def make_secrets(origin_secrets: Mapping[SourceKey, Credential], topology: GatewayTopology) -> list[Credential]:
    """Build per-ingress copies of the source secrets for every gateway namespace.

    Args:
        origin_secrets: Resolved source secrets.
        topology: Gateways whose namespaces receive the copies.

    Returns:
        Target secrets, empty when every gateway lives in the source namespace.

    Raises:
        TopologyUnavailableError: If the gateway namespaces cannot be determined.
        ValueError: If a source secret that needs copying has no UID.

    """
    return _project(
        origin_secrets,
        topology,
        lambda source, namespace: _make_secret(
            source,
            target_secret_name(source),
            namespace,
            make_target_secret_labels(source.name, source.namespace),
        ),
    )


def make_wildcard_secrets(
    origin_secrets: Mapping[SourceKey, Credential],
    topology: GatewayTopology,
) -> list[Credential]:
    """Build shared copies of wildcard source secrets for every gateway namespace.

    Args:
        origin_secrets: Resolved wildcard source secrets.
        topology: Gateways whose namespaces receive the copies.

    Returns:
        Unlabeled target secrets, empty when nothing needs copying.

    Raises:
        TopologyUnavailableError: If the gateway namespaces cannot be determined.

    """
    return _project(
        origin_secrets,
        topology,
        lambda source, namespace: _make_secret(
            source,
            target_wildcard_secret_name(source.name, source.namespace),
            namespace,
            {},
        ),
    )
