"""Tests for secrets/materializer.py module."""

import pytest

from gateway_secrets.exceptions import TopologyUnavailableError
from gateway_secrets.models import (
    ORIGIN_SECRET_NAME_LABEL_KEY,
    ORIGIN_SECRET_NAMESPACE_LABEL_KEY,
    Credential,
    Gateway,
    GatewayTopology,
)
from gateway_secrets.secrets import (
    make_secrets,
    make_target_secret_labels,
    make_wildcard_secrets,
    target_secret_name,
    target_wildcard_secret_name,
)


def _origin(namespace: str, name: str = "test-secret", uid: str = "1234") -> dict:
    secret = Credential(namespace=namespace, name=name, data={"test-data": b"abcd"}, uid=uid)
    return {secret.key: secret}


class TestMakeSecrets:
    """Tests for per-ingress secret projection."""

    def test_same_namespace_skipped(self, topology):
        """Test a secret already in the gateway namespace is not copied."""
        assert make_secrets(_origin("istio-system"), topology) == []

    def test_different_namespace(self, topology):
        """Test a secret is copied into the gateway namespace with origin labels."""
        secrets = make_secrets(_origin("knative-serving"), topology)

        assert secrets == [
            Credential(
                namespace="istio-system",
                name="ingress-1234",
                data={"test-data": b"abcd"},
                labels={
                    ORIGIN_SECRET_NAME_LABEL_KEY: "test-secret",
                    ORIGIN_SECRET_NAMESPACE_LABEL_KEY: "knative-serving",
                },
            )
        ]

    def test_data_is_copied(self, topology):
        """Test the target data is equal to but independent of the source mapping."""
        origin = _origin("knative-serving")
        source = next(iter(origin.values()))

        target = make_secrets(origin, topology)[0]

        assert target.data == source.data
        assert target.data is not source.data

    def test_missing_uid(self, topology):
        """Test a source without UID cannot be named."""
        with pytest.raises(ValueError, match="UID"):
            make_secrets(_origin("knative-serving", uid=""), topology)

    def test_idempotent(self, topology):
        """Test repeated calls produce identical output."""
        origin = {
            **_origin("ns-b", name="b", uid="2"),
            **_origin("ns-a", name="a", uid="1"),
        }

        assert make_secrets(origin, topology) == make_secrets(origin, topology)

    def test_one_copy_per_gateway_namespace(self):
        """Test a copy is made for every distinct gateway namespace except the source one."""
        topology = GatewayTopology(
            gateways=(
                Gateway(name="a", service_url="gw.gateway-a.svc.cluster.local"),
                Gateway(name="b", service_url="gw.gateway-b.svc.cluster.local"),
                Gateway(name="b2", service_url="other.gateway-b.svc.cluster.local"),
                Gateway(name="c", service_url="gw.knative-serving"),
            )
        )

        secrets = make_secrets(_origin("knative-serving"), topology)

        assert [secret.namespace for secret in secrets] == ["gateway-a", "gateway-b"]

    def test_topology_unavailable(self):
        """Test topology errors propagate before any secret is built."""
        with pytest.raises(TopologyUnavailableError):
            make_secrets(_origin("knative-serving"), GatewayTopology())

    def test_no_sources(self, topology):
        """Test no sources produce an empty list."""
        assert make_secrets({}, topology) == []


class TestMakeWildcardSecrets:
    """Tests for shared wildcard secret projection."""

    def test_same_namespace_skipped(self, topology):
        """Test a secret already in the gateway namespace is not copied."""
        assert make_wildcard_secrets(_origin("istio-system"), topology) == []

    def test_different_namespace(self, topology):
        """Test a wildcard secret is copied unlabeled under its hashed name."""
        secrets = make_wildcard_secrets(_origin("knative-serving"), topology)

        assert secrets == [
            Credential(
                namespace="istio-system",
                name=target_wildcard_secret_name("test-secret", "knative-serving"),
                data={"test-data": b"abcd"},
                labels={},
            )
        ]

    def test_uid_not_required(self, topology):
        """Test wildcard names do not depend on the source UID."""
        with_uid = make_wildcard_secrets(_origin("knative-serving", uid="1234"), topology)
        without_uid = make_wildcard_secrets(_origin("knative-serving", uid=""), topology)

        assert with_uid == without_uid

    def test_idempotent(self):
        """Test repeated calls over several sources produce identical, ordered output."""
        topology = GatewayTopology(
            gateways=(
                Gateway(name="b", service_url="gw.gateway-b.svc.cluster.local"),
                Gateway(name="a", service_url="gw.gateway-a.svc.cluster.local"),
            )
        )
        origin = {
            **_origin("ns-c", name="c", uid=""),
            **_origin("ns-a", name="a", uid=""),
            **_origin("ns-b", name="b", uid=""),
        }

        first = make_wildcard_secrets(origin, topology)

        assert first == make_wildcard_secrets(origin, topology)
        assert [(secret.namespace, secret.name) for secret in first] == [
            (namespace, target_wildcard_secret_name(name, source_namespace))
            for source_namespace, name in [("ns-a", "a"), ("ns-b", "b"), ("ns-c", "c")]
            for namespace in ["gateway-a", "gateway-b"]
        ]


class TestTargetNames:
    """Tests for target naming policies."""

    def test_target_secret_name(self):
        """Test per-ingress names are derived from the UID."""
        secret = Credential(namespace="ns", name="name", uid="1234")

        assert target_secret_name(secret) == "ingress-1234"

    def test_wildcard_name_is_deterministic(self):
        """Test the wildcard name is a stable function of name and namespace."""
        name = target_wildcard_secret_name("test-secret", "knative-serving")

        assert name == target_wildcard_secret_name("test-secret", "knative-serving")
        assert name.startswith("wildcard-")
        assert len(name) == len("wildcard-") + 32

    def test_wildcard_name_separator_safe(self):
        """Test shifting characters between name and namespace changes the name."""
        assert target_wildcard_secret_name("b-c", "a") != target_wildcard_secret_name("c", "a-b")

    @pytest.mark.parametrize(
        ("name", "namespace", "uid"),
        [
            ("test-secret", "knative-serving", "1234"),
            ("ingress", "ingress", "ingress"),
            ("1234", "wildcard", "wildcard-1234"),
        ],
    )
    def test_policies_never_collide(self, name, namespace, uid):
        """Test per-ingress and wildcard names differ for the same source."""
        secret = Credential(namespace=namespace, name=name, uid=uid)

        assert target_secret_name(secret) != target_wildcard_secret_name(name, namespace)

    def test_target_labels(self):
        """Test origin labels record name and namespace."""
        assert make_target_secret_labels("test-secret", "knative-serving") == {
            ORIGIN_SECRET_NAME_LABEL_KEY: "test-secret",
            ORIGIN_SECRET_NAMESPACE_LABEL_KEY: "knative-serving",
        }
