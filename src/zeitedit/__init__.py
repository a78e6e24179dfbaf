# SPDX-License-Identifier: MIT

from zeitedit.initialize import initialize
from zeitedit.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
