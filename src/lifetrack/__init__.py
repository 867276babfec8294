# SPDX-License-Identifier: MIT

from lifetrack.cleanup import register_cleanup
from lifetrack.initialize import initialize
from lifetrack.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
