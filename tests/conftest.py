import pytest
from click.testing import CliRunner

from kube_manager.cli import AppContext, main
from kube_manager.errors import ClusterAPIError


class FakeCluster:
    """
    In-memory stand-in for ClusterClient.

    Records every call in ``calls``; a ClusterAPIError stored in
    ``errors[<method name>]`` is raised instead of answering.
    """

    def __init__(self):
        self.nodes = []
        self.pods = {}
        self.deployments = {}
        self.services = {}
        self.namespaces = []
        self.logs = {}
        self.errors = {}
        self.calls = []

    def _record(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.errors:
            raise self.errors[method]

    def list_nodes(self):
        self._record("list_nodes")
        return list(self.nodes)

    def list_pods(self, namespace):
        self._record("list_pods", namespace)
        return list(self.pods.get(namespace, []))

    def list_deployments(self, namespace):
        self._record("list_deployments", namespace)
        return list(self.deployments.get(namespace, []))

    def get_deployment(self, namespace, name):
        self._record("get_deployment", namespace, name)
        for deployment in self.deployments.get(namespace, []):
            if deployment.metadata.name == name:
                return deployment
        raise ClusterAPIError(f'deployments.apps "{name}" not found (404 Not Found)', status=404)

    def update_deployment_replicas(self, namespace, deployment, replicas):
        self._record("update_deployment_replicas", namespace, deployment.metadata.name, replicas)
        deployment.spec.replicas = replicas
        return deployment

    def list_services(self, namespace):
        self._record("list_services", namespace)
        return list(self.services.get(namespace, []))

    def list_namespaces(self):
        self._record("list_namespaces")
        return list(self.namespaces)

    def get_pod_logs(self, namespace, name, tail_lines):
        self._record("get_pod_logs", namespace, name, tail_lines)
        return self.logs.get((namespace, name), "")


@pytest.fixture
def fake_cluster():
    return FakeCluster()


@pytest.fixture
def invoke(fake_cluster):
    """Run the CLI against fake_cluster; returns the click Result."""
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(main, list(args), obj=AppContext(cluster=fake_cluster))

    return _invoke
