#!/usr/bin/env python3
"""
Goby binding generator
----------------------
Reads one Go source file and generates `bindings.go`, which exposes a Go
type's methods to the Goby VM:
- methods returning `Object` with an anonymous receiver become class methods
    func (Player) New(t *vm.Thread) Object
- methods returning `Object` with a named receiver become instance methods
    func (p *Player) Attack(t *vm.Thread, target Object) Object

Every such method gets an adapter with the VM's calling convention, and an
init() block registers them under their snake_case names (`set_health`).

USAGE EXAMPLES
--------------
# 1) Generate bindings for Player into ./bindings.go:
goby-binder --in player.go --type Player

# 2) See which types and methods were discovered:
goby-binder --in player.go --list

DEPENDENCIES
------------
    pip install tree-sitter tree-sitter-go
"""

import argparse
import logging
import sys
from typing import Optional

from binder.src.binder.classifier import BindingClassifier
from binder.src.binder.config import BinderConfig
from binder.src.binder.errors import BinderError
from binder.src.binder.generator import generate
from binder.src.binder.inputs.source_reading import read_text
from binder.src.binder.outputs.output import print_summary, save, to_json

logger = logging.getLogger("binder")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goby-binder",
        description="Generate Goby VM bindings for a Go type",
    )
    parser.add_argument("--in", "-i", dest="source", required=True, help="Go file to create bindings from")
    parser.add_argument("--type", "-t", dest="type_name", help="type to generate bindings for")
    parser.add_argument("--out", "-o", default=None, help="output file (default: bindings.go)")
    parser.add_argument("--stdout", action="store_true", help="print the generated code instead of writing it")
    parser.add_argument("--vm-pkg", default=None, help="import path of the Goby vm package")
    parser.add_argument("--errors-pkg", default=None, help="import path of the Goby vm/errors package")
    parser.add_argument("--marker", default=None, help="result type that marks a bindable method")
    parser.add_argument("--list", action="store_true", help="print the discovered bindings and exit")
    parser.add_argument("--json", action="store_true", help="print the discovered bindings as JSON and exit")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def run(args: argparse.Namespace) -> int:
    config = BinderConfig.from_env().override(
        vm_pkg=args.vm_pkg,
        errors_pkg=args.errors_pkg,
        marker_type=args.marker,
        output=args.out,
    )

    classifier = BindingClassifier(config)
    unit = classifier.classify_source(read_text(args.source), args.source)

    if args.list or args.json:
        if args.list:
            print_summary(unit)
        if args.json:
            print(to_json(unit))
        return 0

    # Generate everything in memory first; nothing is written on failure.
    code = generate(unit, args.type_name, config)
    if args.stdout:
        sys.stdout.write(code)
    else:
        save(code, config.output)
        logger.info("wrote %s bindings to %s", args.type_name, config.output)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    if not args.type_name and not (args.list or args.json):
        parser.error("--type is required unless --list or --json is given")

    configure_logging(args.verbose)
    try:
        return run(args)
    except BinderError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
