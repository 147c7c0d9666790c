#
# Copyright 2026 Flant JSC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from kubewalk import config, decode, fetch, paths
from kubewalk.errors import WalkError
from kubewalk.flatten import iter_documents

PROG = "kubectl-walk"

EXAMPLE = """\
example:
  $ kubectl walk pod nginx --entry spec.containers
  [0].image: nginx
  [0].imagePullPolicy: Always
  [0].name: nginx-pod
  [0].terminationMessagePath: /dev/termination-log
  [0].terminationMessagePolicy: File
  [0].volumeMounts[0].mountPath: /var/run/secrets/kubernetes.io/serviceaccount
  [0].volumeMounts[0].name: kube-api-access-vvbkx
  [0].volumeMounts[0].readOnly: true
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(PROG,
                                     description="Flatten nested objects of the YAML.",
                                     epilog=EXAMPLE,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("resource", nargs="*", metavar="KIND NAME", help="Kind (or short name) and name of the object")
    parser.add_argument("-n", "--namespace", default=config.DEFAULT_NAMESPACE, help="Namespace of kind")
    parser.add_argument("-e", "--entry", default="", help="Entrypoint of an object, e.g. spec.containers[0]")
    parser.add_argument("-f", "--file", help="YAML file to read regardless of kubernetes resource, - for stdin")
    parser.add_argument("-o", "--output", help="Write inside file instead of stdout")
    parser.add_argument("-c", "--kubeconfig", help="Cluster Kubeconfig file, $KUBECONFIG or ~/.kube/config by default")
    parser.add_argument("--context", help="Kubeconfig context to use")
    parser.add_argument("--in-cluster", action="store_true", help="Use the in-cluster service account config")
    parser.add_argument("--request-timeout", type=float, help="API request timeout in seconds")
    parser.add_argument("-p", "--pure", action="store_true", help="Strip auto-generated fields")
    parser.add_argument("--prune", action="append", default=[], metavar="KEY", help="Skip every subtree under KEY, repeatable")
    parser.add_argument("-d", "--depth", type=int, default=-1, help="Depth of walking, -1 for unlimited")
    parser.add_argument("--absolute", action="store_true", help="Prefix paths with the entry path")
    parser.add_argument("--config", default=config.default_config_path(), help=f"Settings file, ${config.CONFIG_ENV} by default")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug messages to stderr")
    return parser


def read_documents(args: argparse.Namespace) -> list:
    if args.file:
        return decode.load_file(args.file)

    kind, name = args.resource
    # object names are lowercase RFC 1123 names
    name = name.lower()
    client = fetch.new_client(kubeconfig=args.kubeconfig, context=args.context, in_cluster=args.in_cluster)
    obj = fetch.fetch_object(client, kind, args.namespace, name, request_timeout=args.request_timeout)
    return [decode.from_object(obj)]


def write_lines(lines: List[str], output: Optional[str]) -> None:
    if not output:
        for line in lines:
            print(line)
        return

    output_file = Path(output)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()

    # settings file provides defaults, explicit flags win
    pre, _ = parser.parse_known_args(argv)
    try:
        settings = config.load_settings(pre.config)
    except WalkError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    parser.set_defaults(**settings)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        stream=sys.stderr,
                        format=f"{PROG}: %(name)s: %(message)s")

    if args.file and args.resource:
        parser.error("KIND NAME cannot be combined with --file")
    if not args.file and len(args.resource) != 2:
        parser.error("KIND and NAME are required unless --file is given")

    try:
        segments = paths.parse(args.entry)
        options = config.build_options(args.depth, args.prune, args.pure)
        documents = read_documents(args)
        lines = list(iter_documents(documents, segments, options, absolute=args.absolute))
        write_lines(lines, args.output)
    except WalkError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{PROG}: error writing {args.output or 'stdout'}: {e.strerror}", file=sys.stderr)
        return 1
    return 0
