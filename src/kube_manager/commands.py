"""
Verb handlers: one cluster request, one projection, one print.

Each handler reports a failed request on stderr and returns False without
printing anything on stdout; tables are printed only once every row has been
projected.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

import click

from .config import (
    DEFAULT_NAMESPACE,
    DEFAULT_TAIL_LINES,
    DEPLOYMENT_COLUMNS,
    NAMESPACE_COLUMNS,
    NODE_COLUMNS,
    POD_COLUMNS,
    SERVICE_COLUMNS,
)
from .errors import ClusterAPIError
from .kubeclient import ClusterClient
from .logger import get_module_logger
from .table import Columns, print_table
from .views import (
    deployment_view,
    namespace_view,
    node_view,
    pod_view,
    service_view,
    view_row,
)

logger = get_module_logger(__name__)


def _report_failure(action: str, err: ClusterAPIError) -> None:
    click.echo(f"Failed to {action}: {err}", err=True)


def _render_listing(
    what: str,
    fetch: Callable[[], list],
    project: Callable[[Any, datetime], Any],
    columns: Columns,
    now: Optional[datetime],
) -> bool:
    try:
        items = fetch()
    except ClusterAPIError as err:
        _report_failure(f"get {what}", err)
        return False
    now = now or datetime.now(timezone.utc)
    rows = [view_row(project(item, now)) for item in items]
    logger.debug("Fetched %d %s", len(rows), what)
    print_table(columns, rows)
    return True


def list_nodes(cluster: ClusterClient, now: Optional[datetime] = None) -> bool:
    """Print NAME, STATUS, ROLES, AGE for every node, in API order."""
    return _render_listing("nodes", cluster.list_nodes, node_view, NODE_COLUMNS, now)


def list_pods(
    cluster: ClusterClient,
    namespace: str = DEFAULT_NAMESPACE,
    now: Optional[datetime] = None,
) -> bool:
    return _render_listing(
        "pods", lambda: cluster.list_pods(namespace), pod_view, POD_COLUMNS, now
    )


def list_deployments(
    cluster: ClusterClient,
    namespace: str = DEFAULT_NAMESPACE,
    now: Optional[datetime] = None,
) -> bool:
    return _render_listing(
        "deployments",
        lambda: cluster.list_deployments(namespace),
        deployment_view,
        DEPLOYMENT_COLUMNS,
        now,
    )


def list_services(
    cluster: ClusterClient,
    namespace: str = DEFAULT_NAMESPACE,
    now: Optional[datetime] = None,
) -> bool:
    return _render_listing(
        "services",
        lambda: cluster.list_services(namespace),
        service_view,
        SERVICE_COLUMNS,
        now,
    )


def list_namespaces(cluster: ClusterClient, now: Optional[datetime] = None) -> bool:
    return _render_listing(
        "namespaces", cluster.list_namespaces, namespace_view, NAMESPACE_COLUMNS, now
    )


def scale_deployment(
    cluster: ClusterClient,
    name: str,
    replicas: int,
    namespace: str = DEFAULT_NAMESPACE,
) -> bool:
    """
    Set a deployment's replica count (read, then replace).

    Args:
        cluster: Connected cluster client.
        name: Deployment name.
        replicas: Desired replica count; already validated as >= 0.
        namespace: Namespace of the deployment.

    Returns:
        True when the update was accepted, False after reporting a failure.
    """
    try:
        deployment = cluster.get_deployment(namespace, name)
    except ClusterAPIError as err:
        _report_failure("get deployment", err)
        return False
    try:
        cluster.update_deployment_replicas(namespace, deployment, replicas)
    except ClusterAPIError as err:
        _report_failure("scale deployment", err)
        return False
    click.echo(f"✓ Scaled deployment {name} to {replicas} replicas")
    return True


def show_logs(
    cluster: ClusterClient,
    pod: str,
    namespace: str = DEFAULT_NAMESPACE,
    tail_lines: int = DEFAULT_TAIL_LINES,
) -> bool:
    """Print the last tail_lines lines of the pod's log as returned by the API."""
    try:
        logs = cluster.get_pod_logs(namespace, pod, tail_lines)
    except ClusterAPIError as err:
        _report_failure("get logs", err)
        return False
    click.echo(logs)
    return True
