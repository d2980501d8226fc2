"""Shared test fixtures for gateway-secret-sync tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from gateway_secrets.certificates import generate_certificate
from gateway_secrets.models import Credential, Gateway, GatewayTopology, IngressTLS, RoutingResource
from gateway_secrets.secrets import InMemorySecretLister


@pytest.fixture(scope="session")
def wildcard_cert():
    """TLS secret with a certificate for *.example.com."""
    return generate_certificate("*.example.com", "wildcard", "knative-serving")


@pytest.fixture(scope="session")
def non_wildcard_cert():
    """TLS secret with a certificate for test.example.com."""
    return generate_certificate("test.example.com", "nonwildcard", "knative-serving")


@pytest.fixture
def test_secret():
    """Secret that does not hold a certificate."""
    return Credential(
        namespace="knative-serving",
        name="secret0",
        data={"test": b"abcd"},
    )


@pytest.fixture
def ingress():
    """Ingress referencing secret0 in knative-serving."""
    return RoutingResource(
        namespace="knative-serving",
        name="ingress",
        tls=(
            IngressTLS(
                hosts=("example.com",),
                secret_name="secret0",
                secret_namespace="knative-serving",
            ),
        ),
    )


@pytest.fixture
def topology():
    """Single gateway whose service lives in istio-system."""
    return GatewayTopology(
        gateways=(
            Gateway(
                name="test-gateway",
                service_url="istio-ingressgateway.istio-system.svc.cluster.local",
            ),
        )
    )


@pytest.fixture
def lister(test_secret):
    """In-memory lister holding test_secret."""
    return InMemorySecretLister.from_credentials(test_secret)


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api for secret reads."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        yield api_instance


@pytest.fixture
def cluster_mocks(mock_kube_config, mock_core_v1_api):
    """Combined fixture for creating a ClusterSecretLister without cluster access."""
    return {
        "config": mock_kube_config,
        "core_api": mock_core_v1_api,
    }


@pytest.fixture(scope="session")
def build_cert_pem():
    """Factory building self-signed PEM certificates with an optional CN and SAN entries."""

    def _build(common_name: str | None, dns_names: list[str] | None = None) -> bytes:
        key = ec.generate_private_key(ec.SECP256R1())
        attributes = [x509.NameAttribute(NameOID.COMMON_NAME, common_name)] if common_name else []
        name = x509.Name(attributes or [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example")])
        now = datetime.now(timezone.utc)
        builder = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=1))
        )
        if dns_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(host) for host in dns_names]), critical=False
            )
        return builder.sign(key, hashes.SHA256()).public_bytes(serialization.Encoding.PEM)

    return _build
