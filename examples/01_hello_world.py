#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.api import run_file


def main():
    path = os.path.join(os.path.dirname(__file__), "hello.b")
    result = run_file(path)
    sys.stdout.write(result.output.decode("ascii"))
    print(f"{result.steps} steps, halted on {result.halt_reason.value}")


if __name__ == "__main__":
    main()
