"""Kubernetes cluster interaction utilities.

This module provides a SecretLister reading secrets from a live cluster
and conversions between Credential and the kubernetes client's V1Secret.
"""

import base64

from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import MaxRetryError

from gateway_secrets import console
from gateway_secrets.exceptions import ClusterConnectionError, SecretNotFoundError
from gateway_secrets.models import TLS_CERT_KEY, Credential

_SECRET_TYPE_TLS = "kubernetes.io/tls"
_SECRET_TYPE_OPAQUE = "Opaque"


def credential_from_v1_secret(secret: client.V1Secret) -> Credential:
    """Convert a V1Secret returned by the API into a Credential.

    Args:
        secret: The API object, with base64 encoded data values.

    Returns:
        A Credential holding the decoded data bytes.

    """
    metadata = secret.metadata
    return Credential(
        namespace=metadata.namespace,
        name=metadata.name,
        data={key: base64.b64decode(value) for key, value in (secret.data or {}).items()},
        labels=dict(metadata.labels or {}),
        uid=metadata.uid or "",
    )


def credential_to_v1_secret(credential: Credential) -> client.V1Secret:
    """Convert a Credential into a V1Secret ready to be written to the API.

    Args:
        credential: The secret to convert.

    Returns:
        A V1Secret with base64 encoded data, typed kubernetes.io/tls when
        it carries a certificate.

    """
    secret_type = _SECRET_TYPE_TLS if TLS_CERT_KEY in credential.data else _SECRET_TYPE_OPAQUE
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(
            name=credential.name,
            namespace=credential.namespace,
            labels=dict(credential.labels),
        ),
        data={key: base64.b64encode(value).decode() for key, value in credential.data.items()},
        type=secret_type,
    )


class ClusterSecretLister:
    """Reads secrets from a Kubernetes cluster.

    Attributes:
        context: The kubeconfig context in use, None for the current one.

    """

    def __init__(self, *, context: str | None = None) -> None:
        """Load the kubeconfig and create the API client.

        Args:
            context: Kubeconfig context to use. Defaults to the current context.
                     Must be passed as a keyword argument.

        Raises:
            ClusterConnectionError: If the kubeconfig is invalid or missing.

        """
        self.context: str | None = context
        try:
            config.load_kube_config(context=context)
        except ConfigException as e:
            raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e
        self._api = client.CoreV1Api()
        console.action(f"Reading secrets from {console.highlight(context or 'current')} context")

    def get(self, namespace: str, name: str) -> Credential:
        """Fetch a secret from the cluster.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            ClusterConnectionError: If the API is unreachable or rejects the request.

        """
        try:
            secret = self._api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise SecretNotFoundError(namespace, name) from e
            raise ClusterConnectionError(f"Failed to read secret '{namespace}/{name}': {e.reason}") from e
        except MaxRetryError as e:
            raise ClusterConnectionError(f"Failed to connect to the Kubernetes cluster: {e.reason}") from e

        ic(namespace, name)
        return credential_from_v1_secret(secret)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"ClusterSecretLister(context={self.context!r})"
