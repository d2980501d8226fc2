#!/usr/bin/env python
"""Command-line interface for gateway-secret-sync.

This module provides the CLI entry point which resolves the TLS secrets
of an Ingress manifest, classifies them and prints the secrets that have
to exist in the ingress gateway namespaces. Nothing is written to the
cluster; the output is a YAML stream for review or `kubectl apply`.
"""

import sys

import click
import yaml
from icecream import ic
from kubernetes import client

from gateway_secrets import __version__, console
from gateway_secrets.cluster import ClusterSecretLister, credential_to_v1_secret
from gateway_secrets.config import load_routing_resource, load_secret, load_topology
from gateway_secrets.exceptions import ClusterConnectionError, SecretSyncError
from gateway_secrets.models import Credential, GatewayTopology, RoutingResource
from gateway_secrets.secrets import (
    InMemorySecretLister,
    SecretLister,
    categorize_secrets,
    get_secrets,
    make_secrets,
    make_wildcard_secrets,
)


def plan_secrets(
    routing_resource: RoutingResource,
    lister: SecretLister,
    topology: GatewayTopology,
) -> tuple[list[Credential], list[Credential]]:
    """Compute the gateway secrets needed by a routing resource.

    Args:
        routing_resource: The resource whose TLS secrets are synchronized.
        lister: Lookup capability for the source secrets.
        topology: Gateways that serve the resource.

    Returns:
        Tuple of (per-ingress secrets, wildcard secrets).

    Raises:
        SecretSyncError: If any step fails. Nothing is returned partially.

    """
    origin_secrets = get_secrets(routing_resource, lister)
    classified = categorize_secrets(origin_secrets)

    return (
        make_secrets(classified.non_wildcard, topology),
        make_wildcard_secrets(classified.wildcard, topology),
    )


def render_manifests(secrets: list[Credential]) -> str:
    """Render secrets as a multi-document YAML stream."""
    api_client = client.ApiClient()
    documents = [api_client.sanitize_for_serialization(credential_to_v1_secret(secret)) for secret in secrets]
    return yaml.safe_dump_all(documents, sort_keys=False)


def _build_lister(secret_files: tuple[str, ...], context: str | None) -> SecretLister:
    if secret_files:
        console.action(f"Reading secrets from {len(secret_files)} manifest(s)")
        return InMemorySecretLister.from_credentials(*(load_secret(path) for path in secret_files))
    return ClusterSecretLister(context=context)


@click.command(help="Plan TLS secret synchronization into ingress gateway namespaces")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--ingress", "-i", required=False, help="Ingress manifest to plan secrets for")
@click.option("--topology", "-t", required=False, help="gateway topology file")
@click.option("--secret-file", "-s", multiple=True, help="Secret manifest to read instead of the cluster")
@click.option("--context", "-c", required=False, help="kubeconfig context to read secrets from")
def cli(
    version: bool,
    debug: bool,
    ingress: str | None,
    topology: str | None,
    secret_file: tuple[str, ...],
    context: str | None,
) -> None:
    """Process CLI arguments and print the planned gateway secrets.

    Args:
        version: Print version and exit.
        debug: Enable debug output.
        ingress: Path to the Ingress manifest.
        topology: Path to the gateway topology file.
        secret_file: Secret manifests used instead of cluster access.
        context: Kubeconfig context used when reading from the cluster.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    if not ingress or not topology:
        raise click.UsageError("Both --ingress and --topology are required")

    try:
        routing_resource = load_routing_resource(ingress)
        gateway_topology = load_topology(topology)
        console.info(f"Topology lists {len(gateway_topology.gateways)} gateway(s)")
        lister = _build_lister(secret_file, context)

        ingress_ref = f"{routing_resource.namespace}/{routing_resource.name}"
        console.action(f"Planning secrets for {console.highlight(ingress_ref)}")
        per_ingress, wildcard = plan_secrets(routing_resource, lister, gateway_topology)
    except ClusterConnectionError as e:
        console.error(f"Cluster connection failed: {e}")
        sys.exit(1)
    except (SecretSyncError, ValueError) as e:
        raise click.ClickException(str(e)) from None

    namespaces = gateway_topology.target_namespaces()
    for namespace in namespaces:
        console.step(f"Gateway namespace {console.highlight(namespace)}")

    planned = [*per_ingress, *wildcard]
    if planned:
        click.echo(render_manifests(planned), nl=False)
        console.secret_table("Planned secrets", planned)
        console.success(f"Planned {len(planned)} secret(s)")
    else:
        console.warning("No secrets need to be synchronized")

    console.summary_panel(
        "Secret Sync Plan",
        {
            "Ingress": ingress_ref,
            "Gateway namespaces": ", ".join(namespaces),
            "Per-ingress secrets": str(len(per_ingress)),
            "Wildcard secrets": str(len(wildcard)),
        },
    )


if __name__ == "__main__":
    cli()
