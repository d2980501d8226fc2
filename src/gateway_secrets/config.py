"""Loading of gateway topology, routing resources and secrets from YAML files.

Topology files list the ingress gateways:

    gateways:
      - name: knative-ingress-gateway
        serviceURL: istio-ingressgateway.istio-system.svc.cluster.local

Routing resources are Knative-style Ingress manifests whose spec.tls
entries reference secrets by secretName and secretNamespace.
"""

import base64
import binascii
from typing import Any

import yaml

from gateway_secrets.exceptions import ConfigError
from gateway_secrets.models import Credential, Gateway, GatewayTopology, IngressTLS, RoutingResource


def _load_document(path: str) -> dict[str, Any]:
    """Parse a single-document YAML file into a mapping.

    Raises:
        ConfigError: If the file does not exist, contains malformed YAML,
            is empty, holds several documents, or is not a mapping.

    """
    try:
        with open(path) as stream:
            docs = [doc for doc in yaml.safe_load_all(stream) if doc is not None]
    except FileNotFoundError as err:
        raise ConfigError(f"File '{path}' does not exist") from err
    except yaml.YAMLError as err:
        raise ConfigError(f"File '{path}' contains malformed YAML: {err}") from err

    if not docs:
        raise ConfigError(f"File '{path}' is empty")
    if len(docs) > 1:
        raise ConfigError(f"File '{path}' contains multiple YAML documents. Only single document files are supported.")
    if not isinstance(docs[0], dict):
        raise ConfigError(f"File '{path}' does not contain a YAML mapping")
    return docs[0]


def _mapping(document: dict[str, Any], field: str, owner: str) -> dict[str, Any]:
    """Return document[field] as a mapping, treating a missing field as empty.

    Raises:
        ConfigError: If the field is present but not a mapping.

    """
    value = document.get(field) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{owner} field '{field}' must be a mapping, got {type(value).__name__}")
    return value


def parse_topology(document: dict[str, Any]) -> GatewayTopology:
    """Build a GatewayTopology from a parsed topology document.

    Raises:
        ConfigError: If a gateway entry lacks a name or serviceURL.

    """
    entries = document.get("gateways") or []
    if not isinstance(entries, list):
        raise ConfigError("'gateways' must be a list")

    gateways: list[Gateway] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name") or not entry.get("serviceURL"):
            raise ConfigError(f"Gateway entry must define 'name' and 'serviceURL': {entry!r}")
        gateways.append(Gateway(name=str(entry["name"]), service_url=str(entry["serviceURL"])))
    return GatewayTopology(gateways=tuple(gateways))


def parse_routing_resource(document: dict[str, Any]) -> RoutingResource:
    """Build a RoutingResource from a parsed Ingress manifest.

    Raises:
        ConfigError: If metadata or a TLS entry is incomplete or has the
            wrong shape.

    """
    metadata = _mapping(document, "metadata", "Ingress manifest")
    name = metadata.get("name")
    namespace = metadata.get("namespace")
    if not name or not namespace:
        raise ConfigError("Ingress manifest must define metadata.name and metadata.namespace")

    tls_entries = _mapping(document, "spec", "Ingress manifest").get("tls") or []
    if not isinstance(tls_entries, list):
        raise ConfigError(f"Ingress '{namespace}/{name}' spec.tls must be a list")

    declarations: list[IngressTLS] = []
    for entry in tls_entries:
        if not isinstance(entry, dict):
            raise ConfigError(f"Invalid TLS entry in ingress '{namespace}/{name}': {entry!r}")
        hosts = entry.get("hosts") or []
        if not isinstance(hosts, list) or not all(isinstance(host, str) for host in hosts):
            raise ConfigError(
                f"TLS entry hosts in ingress '{namespace}/{name}' must be a list of strings: {hosts!r}"
            )
        try:
            declarations.append(
                IngressTLS(
                    hosts=tuple(hosts),
                    secret_name=entry["secretName"],
                    secret_namespace=entry["secretNamespace"],
                )
            )
        except (KeyError, ValueError) as err:
            raise ConfigError(f"Invalid TLS entry in ingress '{namespace}/{name}': {entry!r}") from err

    return RoutingResource(namespace=namespace, name=name, tls=tuple(declarations))


def parse_secret(document: dict[str, Any]) -> Credential:
    """Build a Credential from a parsed Secret manifest.

    Entries under 'data' are base64 decoded, entries under 'stringData'
    are UTF-8 encoded and take precedence, as the API server does.

    Raises:
        ConfigError: If the manifest is not a Secret, has the wrong shape,
            or data is not base64.

    """
    if document.get("kind") != "Secret":
        raise ConfigError(f"Expected a Secret manifest, got kind '{document.get('kind')}'")

    metadata = _mapping(document, "metadata", "Secret manifest")
    name = metadata.get("name")
    namespace = metadata.get("namespace")
    if not name or not namespace:
        raise ConfigError("Secret manifest must define metadata.name and metadata.namespace")

    owner = f"Secret '{namespace}/{name}'"
    data: dict[str, bytes] = {}
    for key, value in _mapping(document, "data", owner).items():
        try:
            data[key] = base64.b64decode(value, validate=True)
        except (binascii.Error, TypeError) as err:
            raise ConfigError(f"{owner} key '{key}' is not valid base64") from err
    for key, value in _mapping(document, "stringData", owner).items():
        data[key] = str(value).encode()

    return Credential(
        namespace=namespace,
        name=name,
        data=data,
        labels={str(key): str(value) for key, value in _mapping(metadata, "labels", owner).items()},
        uid=str(metadata.get("uid") or ""),
    )


def load_secret(path: str) -> Credential:
    """Load a secret from a Secret YAML manifest."""
    return parse_secret(_load_document(path))


def load_topology(path: str) -> GatewayTopology:
    """Load the gateway topology from a YAML file."""
    return parse_topology(_load_document(path))


def load_routing_resource(path: str) -> RoutingResource:
    """Load a routing resource from an Ingress YAML manifest."""
    return parse_routing_resource(_load_document(path))
