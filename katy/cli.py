import argparse
import json
import logging
import sys

from katy.accessor import ClusterAccessor, InMemoryAccessor
from katy.config import (
    DEFAULT_NAMESPACE,
    apply_default_kubeconfig_env,
    build_kubernetes_accessor,
)
from katy.errors import ConfigurationError, PodNotPresent, TransportError
from katy.output import output_result
from katy.pods import PodQueries

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_TRANSPORT = 2
EXIT_CONFIG = 3

# command -> PodQueries method returning a single value
_POD_COMMANDS = {
    "phase": "get_phase",
    "status": "get_status",
    "reason": "get_condition_reason",
    "start-time": "get_start_time",
    "running": "is_running",
    "ready": "is_ready",
    "containers-ready": "are_containers_ready",
    "containers": "get_container_ready_statuses",
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-n", "--namespace", default=DEFAULT_NAMESPACE)
    common.add_argument("--kubeconfig", help="Path to kubeconfig (default: $KUBE_CONFIG_PATH)")
    common.add_argument("--in-cluster", action="store_true", help="Use the pod's service account")
    common.add_argument("--from-file", help="Read pods from a JSON file instead of a cluster")
    common.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    common.add_argument("--verbose", action="store_true")

    parser = argparse.ArgumentParser(prog="katy", description="Query Kubernetes Pod readiness")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("count", parents=[common], help="Number of pods in the namespace")

    describe = sub.add_parser("describe", parents=[common], help="Full readiness report")
    describe.add_argument("pod")
    describe.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (text, json, yaml)",
    )

    for command in _POD_COMMANDS:
        p = sub.add_parser(command, parents=[common])
        p.add_argument("pod")

    return parser


def _build_accessor(args) -> ClusterAccessor:
    if args.from_file:
        return InMemoryAccessor.from_json(args.from_file)
    kubeconfig = args.kubeconfig
    if not kubeconfig and not args.in_cluster:
        kubeconfig = apply_default_kubeconfig_env()
    return build_kubernetes_accessor(
        kubeconfig,
        in_cluster=args.in_cluster,
        request_timeout=args.timeout,
    )


def _print_value(value) -> None:
    if isinstance(value, bool):
        print("true" if value else "false")
    elif isinstance(value, dict):
        print(json.dumps(value, indent=2, sort_keys=True))
    else:
        print(value)


def run(args) -> int:
    queries = PodQueries(_build_accessor(args))

    if args.command == "count":
        _print_value(queries.count_pods(args.namespace))
    elif args.command == "describe":
        output_result(queries.describe(args.namespace, args.pod), args.format)
    else:
        method = getattr(queries, _POD_COMMANDS[args.command])
        _print_value(method(args.namespace, args.pod))
    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except PodNotPresent as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except TransportError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_TRANSPORT
    except ConfigurationError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
