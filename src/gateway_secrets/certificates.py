"""Certificate inspection utilities.

This module extracts the hosts a TLS secret's certificate is issued for,
and provides a self-signed certificate generator for fixtures.
"""

from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from icecream import ic

from gateway_secrets.exceptions import InvalidCertificateError
from gateway_secrets.models import TLS_CERT_KEY, TLS_PRIVATE_KEY_KEY, Credential

WILDCARD_PREFIX = "*."


def is_wildcard_host(host: str) -> bool:
    """Check whether a host is a wildcard pattern such as '*.example.com'."""
    return host.startswith(WILDCARD_PREFIX)


def get_hosts_from_pem(payload: bytes) -> list[str]:
    """Return the hosts secured by the leaf certificate of a PEM payload.

    Subject Alternative Name DNS entries are returned when present,
    otherwise the subject Common Name. For a certificate chain only the
    first (leaf) certificate is inspected.

    Args:
        payload: PEM encoded certificate or certificate chain.

    Returns:
        Hosts in the order they appear in the certificate.

    Raises:
        InvalidCertificateError: If the payload is empty, not a PEM X.509
            certificate, or names no host.

    """
    if not payload:
        raise InvalidCertificateError("Certificate payload is empty")

    try:
        leaf = x509.load_pem_x509_certificates(payload)[0]
    except ValueError as err:
        raise InvalidCertificateError(f"Failed to decode PEM certificate: {err}") from err

    try:
        san = leaf.extensions.get_extension_for_class(x509.SubjectAlternativeName)
        hosts = san.value.get_values_for_type(x509.DNSName)
    except x509.ExtensionNotFound:
        hosts = []
    except ValueError as err:
        raise InvalidCertificateError(f"Failed to parse certificate extensions: {err}") from err

    if not hosts:
        hosts = [str(attr.value) for attr in leaf.subject.get_attributes_for_oid(NameOID.COMMON_NAME)]

    if not hosts:
        raise InvalidCertificateError("Certificate does not name any host")

    return hosts


def get_hosts_from_cert_secret(secret: Credential) -> list[str]:
    """Return the hosts secured by the certificate stored in a TLS secret.

    Args:
        secret: A secret holding a PEM certificate under 'tls.crt'.

    Returns:
        Hosts the certificate is issued for.

    Raises:
        InvalidCertificateError: If the secret holds no valid certificate.

    """
    payload = secret.data.get(TLS_CERT_KEY)
    if payload is None:
        raise InvalidCertificateError(f"Secret '{secret.key}' has no '{TLS_CERT_KEY}' entry")

    try:
        hosts = get_hosts_from_pem(payload)
    except InvalidCertificateError as err:
        raise InvalidCertificateError(f"Secret '{secret.key}': {err}") from err

    ic(secret.key, hosts)
    return hosts


def generate_certificate(host: str, secret_name: str, namespace: str, *, days: int = 365) -> Credential:
    """Generate a self-signed certificate for a host wrapped in a TLS secret.

    Args:
        host: Host to issue the certificate for, used as CN and SAN.
        secret_name: Name of the returned secret.
        namespace: Namespace of the returned secret.
        days: Validity period in days.

    Returns:
        A Credential with PEM 'tls.crt' and 'tls.key' entries.

    """
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    subject = issuer = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, host)])
    now = datetime.now(timezone.utc)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=days))
        .add_extension(x509.SubjectAlternativeName([x509.DNSName(host)]), critical=False)
        .sign(private_key, hashes.SHA256())
    )

    cert_pem = certificate.public_bytes(serialization.Encoding.PEM)
    key_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )

    return Credential(
        namespace=namespace,
        name=secret_name,
        data={TLS_CERT_KEY: cert_pem, TLS_PRIVATE_KEY_KEY: key_pem},
    )
