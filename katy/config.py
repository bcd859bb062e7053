import logging
import os
from collections.abc import MutableMapping

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from katy.accessor import KubernetesAccessor
from katy.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"
KUBE_CONFIG_ENV = "KUBE_CONFIG_PATH"


def _home_dir(environ: MutableMapping[str, str]) -> str:
    home = environ.get("HOME")
    if home:
        return home
    expanded = os.path.expanduser("~")
    if expanded == "~":
        raise ConfigurationError("Error fetching $HOME")
    return expanded


def resolve_kubeconfig_path(environ: MutableMapping[str, str] | None = None) -> str:
    """
    $KUBE_CONFIG_PATH if set, otherwise $HOME/.kube/config.
    """
    environ = os.environ if environ is None else environ
    path = environ.get(KUBE_CONFIG_ENV)
    if path:
        return path
    return os.path.join(_home_dir(environ), ".kube", "config")


def apply_default_kubeconfig_env(environ: MutableMapping[str, str] | None = None) -> str:
    """
    Export the default kubeconfig location unless the user already set one.
    """
    environ = os.environ if environ is None else environ
    if KUBE_CONFIG_ENV not in environ:
        environ[KUBE_CONFIG_ENV] = resolve_kubeconfig_path(environ)
    return environ[KUBE_CONFIG_ENV]


def build_kubernetes_accessor(
    kubeconfig_path: str | None = None,
    *,
    in_cluster: bool = False,
    request_timeout: float | None = None,
) -> KubernetesAccessor:
    try:
        if in_cluster:
            config.load_incluster_config()
        else:
            path = kubeconfig_path or resolve_kubeconfig_path()
            logger.debug("loading kubeconfig from %s", path)
            config.load_kube_config(config_file=path)
    except (ConfigException, OSError) as e:
        raise ConfigurationError(f"cannot load Kubernetes configuration: {e}") from e

    return KubernetesAccessor(client.CoreV1Api(), request_timeout=request_timeout)
