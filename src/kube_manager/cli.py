"""
CLI entry point for kube-manager.

Parses the verb and its arguments, connects to the cluster on first use,
then delegates to the handlers in commands.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import click

from . import __version__
from .commands import (
    list_deployments,
    list_namespaces,
    list_nodes,
    list_pods,
    list_services,
    scale_deployment,
    show_logs,
)
from .config import (
    DEFAULT_NAMESPACE,
    DEFAULT_TAIL_LINES,
    KUBECONFIG_ENV,
    REQUEST_TIMEOUT_ENV,
    resolve_kubeconfig,
)
from .errors import ClusterConfigError
from .kubeclient import ClusterClient
from .logger import set_global_log_level, verbosity_to_level

# Shown at the bottom of kube-manager --help / kube-manager -h
EPILOG = """
Examples:

  kube-manager nodes                     # List all nodes
  kube-manager pods                      # Pods in namespace default
  kube-manager pods kube-system          # Pods in namespace kube-system
  kube-manager deploy app                # Deployments in namespace app
  kube-manager scale web 3 app           # Scale deployment web in app to 3 replicas
  kube-manager logs web-7d9c-x2x app     # Last 100 log lines of a pod
  kube-manager logs --tail 20 web-7d9c   # Last 20 log lines
  kube-manager svc                       # Services in namespace default
  kube-manager ns                        # List all namespaces
  kube-manager --context staging nodes   # Use another kubeconfig context
"""


@dataclass
class AppContext:
    """
    Per-invocation state shared by all verbs.

    ``cluster`` is created lazily by connect(); tests set it up front to run
    commands against a fake backend.
    """

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    request_timeout: Optional[float] = None
    cluster: Optional[ClusterClient] = None

    def connect(self) -> ClusterClient:
        if self.cluster is None:
            self.cluster = ClusterClient.from_kubeconfig(
                resolve_kubeconfig(self.kubeconfig),
                context=self.context,
                request_timeout=self.request_timeout,
            )
        return self.cluster


def _cluster(app: AppContext) -> ClusterClient:
    # Connection problems abort the process with exit code 1.
    try:
        return app.connect()
    except ClusterConfigError as err:
        raise click.ClickException(str(err)) from err


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.version_option(__version__, prog_name="kube-manager")
@click.option(
    "--kubeconfig",
    envvar=KUBECONFIG_ENV,
    metavar="PATH",
    help="Kubeconfig to load (default: $KUBECONFIG, then ~/.kube/config)",
)
@click.option(
    "--context",
    "kube_context",
    metavar="NAME",
    help="Kubeconfig context to use instead of the current context",
)
@click.option(
    "--request-timeout",
    type=click.FloatRange(min=0, min_open=True),
    envvar=REQUEST_TIMEOUT_ENV,
    metavar="SECONDS",
    help="Timeout for each cluster API request (default: no client-side timeout)",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-vv for debug)")
@click.pass_context
def main(
    ctx: click.Context,
    kubeconfig: Optional[str],
    kube_context: Optional[str],
    request_timeout: Optional[float],
    verbose: int,
) -> None:
    """Kubernetes cluster management CLI."""
    set_global_log_level(verbosity_to_level(verbose))
    app = ctx.ensure_object(AppContext)
    app.kubeconfig = kubeconfig or None
    app.context = kube_context
    app.request_timeout = request_timeout


@main.command("nodes")
@click.pass_obj
def nodes_cmd(app: AppContext) -> None:
    """List all nodes."""
    list_nodes(_cluster(app))


@main.command("pods")
@click.argument("namespace", default=DEFAULT_NAMESPACE)
@click.pass_obj
def pods_cmd(app: AppContext, namespace: str) -> None:
    """List pods in a namespace."""
    list_pods(_cluster(app), namespace)


@main.command("deploy")
@click.argument("namespace", default=DEFAULT_NAMESPACE)
@click.pass_obj
def deploy_cmd(app: AppContext, namespace: str) -> None:
    """List deployments in a namespace."""
    list_deployments(_cluster(app), namespace)


@main.command("scale")
@click.argument("deployment")
@click.argument("replicas", type=click.IntRange(min=0))
@click.argument("namespace", default=DEFAULT_NAMESPACE)
@click.pass_obj
def scale_cmd(app: AppContext, deployment: str, replicas: int, namespace: str) -> None:
    """
    Scale a deployment.

    REPLICAS must be a non-negative integer; anything else is rejected before
    the cluster is contacted.
    """
    scale_deployment(_cluster(app), deployment, replicas, namespace)


@main.command("logs")
@click.option(
    "--tail",
    "tail_lines",
    type=click.IntRange(min=1),
    default=DEFAULT_TAIL_LINES,
    show_default=True,
    help="Number of lines from the end of the log to show",
)
@click.argument("pod")
@click.argument("namespace", default=DEFAULT_NAMESPACE)
@click.pass_obj
def logs_cmd(app: AppContext, tail_lines: int, pod: str, namespace: str) -> None:
    """Get logs from a pod."""
    show_logs(_cluster(app), pod, namespace, tail_lines)


@main.command("svc")
@click.argument("namespace", default=DEFAULT_NAMESPACE)
@click.pass_obj
def svc_cmd(app: AppContext, namespace: str) -> None:
    """List services in a namespace."""
    list_services(_cluster(app), namespace)


@main.command("ns")
@click.pass_obj
def ns_cmd(app: AppContext) -> None:
    """List all namespaces."""
    list_namespaces(_cluster(app))


if __name__ == "__main__":
    main()
