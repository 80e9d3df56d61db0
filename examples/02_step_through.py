#!/usr/bin/env python3

import io
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi import Engine, parse


def main():
    # Reads two bytes and prints their sum
    program = parse(",>,[-<+>]<.")
    stdout = io.BytesIO()
    engine = Engine(program, io.BytesIO(bytes([20, 22])), stdout)

    while engine.step():
        state = engine.state
        print(f"pc={state.pc:3d} ptr={state.pointer:3d} cell={engine.cell:3d}")

    print(f"output: {list(stdout.getvalue())}")


if __name__ == "__main__":
    main()
