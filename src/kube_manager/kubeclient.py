"""
Cluster API access through the official Kubernetes client.

ClusterClient wraps a CoreV1Api / AppsV1Api pair and exposes one method per
resource kind and verb. Each method is a single request; API and transport
failures are raised as ClusterAPIError with a readable message.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import urllib3
import yaml
from kubernetes import client, config
from kubernetes.client import ApiException

from .config import DEFAULT_NAMESPACE, DEFAULT_TAIL_LINES
from .errors import ClusterAPIError, ClusterConfigError
from .logger import get_module_logger

logger = get_module_logger(__name__)


def describe_api_exception(err: ApiException) -> str:
    """
    Build a one-line message from an ApiException.

    Prefers the ``message`` of the Status object the API server returns in the
    body (e.g. 'pods is forbidden: User "x" cannot list ...'), falling back to
    the HTTP reason phrase.
    """
    message = None
    if err.body:
        try:
            payload = json.loads(err.body)
        except (TypeError, ValueError):
            payload = None
        if isinstance(payload, dict):
            message = payload.get("message")
    reason = err.reason or "request failed"
    if err.status:
        status = f"{err.status} {reason}"
        return f"{message} ({status})" if message else status
    return message or reason


class ClusterClient:
    """
    Typed read/write calls against one cluster.

    Build it with from_kubeconfig() for real use, or pass API objects directly
    (tests hand in mocks).
    """

    def __init__(
        self,
        core: client.CoreV1Api,
        apps: client.AppsV1Api,
        request_timeout: Optional[float] = None,
    ) -> None:
        self.core = core
        self.apps = apps
        self.request_timeout = request_timeout

    @classmethod
    def from_kubeconfig(
        cls,
        kubeconfig: str,
        context: Optional[str] = None,
        request_timeout: Optional[float] = None,
    ) -> "ClusterClient":
        """
        Load a kubeconfig into a dedicated ApiClient and wrap it.

        Args:
            kubeconfig: Path to the kubeconfig file (or a KUBECONFIG-style
                list of paths).
            context: Optional context name; the file's current-context is used
                when omitted.
            request_timeout: Seconds to wait for each request; None keeps the
                transport default.

        Raises:
            ClusterConfigError: The file is missing or invalid, or the context
                does not exist.
        """
        logger.info("Loading kubeconfig %s (context: %s)", kubeconfig, context or "current")
        try:
            api_client = config.new_client_from_config(config_file=kubeconfig, context=context)
        except (config.ConfigException, OSError, yaml.YAMLError, TypeError, ValueError) as err:
            # Unparsable YAML and non-mapping documents surface as YAMLError or TypeError.
            raise ClusterConfigError(f"failed to load kubeconfig: {err}") from err
        return cls(client.CoreV1Api(api_client), client.AppsV1Api(api_client), request_timeout)

    def _request(self, description: str, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        logger.debug("Requesting %s", description)
        if self.request_timeout is not None:
            kwargs["_request_timeout"] = self.request_timeout
        try:
            return method(*args, **kwargs)
        except ApiException as err:
            raise ClusterAPIError(describe_api_exception(err), status=err.status) from err
        except urllib3.exceptions.HTTPError as err:
            raise ClusterAPIError(str(err)) from err

    def list_nodes(self) -> list:
        return self._request("nodes", self.core.list_node).items

    def list_pods(self, namespace: str = DEFAULT_NAMESPACE) -> list:
        return self._request(
            f"pods in namespace {namespace}", self.core.list_namespaced_pod, namespace
        ).items

    def list_deployments(self, namespace: str = DEFAULT_NAMESPACE) -> list:
        return self._request(
            f"deployments in namespace {namespace}",
            self.apps.list_namespaced_deployment,
            namespace,
        ).items

    def get_deployment(self, namespace: str, name: str) -> client.V1Deployment:
        return self._request(
            f"deployment {namespace}/{name}", self.apps.read_namespaced_deployment, name, namespace
        )

    def update_deployment_replicas(
        self, namespace: str, deployment: client.V1Deployment, replicas: int
    ) -> client.V1Deployment:
        """
        Set spec.replicas on a fetched deployment and write it back.

        Takes the deployment returned by get_deployment() rather than the
        (namespace, name, replicas) triple, so scaling stays one read plus one
        write. The object keeps the resourceVersion it was read with, so a change made
        in between is rejected by the server with 409 Conflict.
        """
        deployment.spec.replicas = replicas
        name = deployment.metadata.name
        return self._request(
            f"update of deployment {namespace}/{name} to {replicas} replicas",
            self.apps.replace_namespaced_deployment,
            name,
            namespace,
            deployment,
        )

    def list_services(self, namespace: str = DEFAULT_NAMESPACE) -> list:
        return self._request(
            f"services in namespace {namespace}", self.core.list_namespaced_service, namespace
        ).items

    def list_namespaces(self) -> list:
        return self._request("namespaces", self.core.list_namespace).items

    def get_pod_logs(
        self,
        namespace: str,
        name: str,
        tail_lines: int = DEFAULT_TAIL_LINES,
    ) -> str:
        return self._request(
            f"last {tail_lines} log lines of pod {namespace}/{name}",
            self.core.read_namespaced_pod_log,
            name,
            namespace,
            tail_lines=tail_lines,
        )
