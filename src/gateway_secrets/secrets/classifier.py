"""Wildcard classification of TLS secrets."""

from collections.abc import Mapping

from icecream import ic

from gateway_secrets.certificates import get_hosts_from_cert_secret, is_wildcard_host
from gateway_secrets.models import ClassificationResult, Credential, SourceKey


def categorize_secrets(secrets: Mapping[SourceKey, Credential]) -> ClassificationResult:
    """Split secrets into non-wildcard and wildcard certificates.

    A secret is a wildcard secret when any host of its certificate is a
    wildcard host. A secret is never split across both buckets.

    Args:
        secrets: Mapping of SourceKey to TLS secret.

    Returns:
        ClassificationResult with two disjoint mappings covering the input.

    Raises:
        InvalidCertificateError: If any secret does not hold a valid
            certificate. No partial classification is returned.

    """
    non_wildcard: dict[SourceKey, Credential] = {}
    wildcard: dict[SourceKey, Credential] = {}

    for key, secret in secrets.items():
        hosts = get_hosts_from_cert_secret(secret)
        if any(is_wildcard_host(host) for host in hosts):
            wildcard[key] = secret
        else:
            non_wildcard[key] = secret

    ic(len(non_wildcard), len(wildcard))
    return ClassificationResult(non_wildcard=non_wildcard, wildcard=wildcard)
