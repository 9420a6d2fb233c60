#!/usr/bin/env python3
"""
Demo: translate the example unit to C and show the failure modes.
"""

import logging

from goc import StatementPolicy, TranspileError, transpile_string
from goc.examples import EXAMPLE_SOURCE, build_example_file
from goc.serialization import file_to_yaml


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 80)
    print("GO SOURCE")
    print("=" * 80)
    print(EXAMPLE_SOURCE)

    print("=" * 80)
    print("C OUTPUT")
    print("=" * 80)
    print(transpile_string(EXAMPLE_SOURCE, filename="config.go"))

    print("=" * 80)
    print("SYNTAX TREE (first 30 lines)")
    print("=" * 80)
    print("\n".join(file_to_yaml(build_example_file()).splitlines()[:30]))

    print("\n" + "=" * 80)
    print("FAILURES")
    print("=" * 80)
    for source in ("", "package a\n\nfunc a() (int, error) {}", "package a\nvar x float64"):
        try:
            transpile_string(source)
        except TranspileError as e:
            print(str(e).splitlines()[0])

    print("\n" + "=" * 80)
    print("COMMENT POLICY")
    print("=" * 80)
    body = "package a\nfunc a() {\n\tn := 1\n\tn++\n}\n"
    print(transpile_string(body, policy=StatementPolicy.COMMENT))


if __name__ == "__main__":
    main()
