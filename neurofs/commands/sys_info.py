import argparse

from .. import sys_info


def run():
    """Run the sys_info command-line helper.

    Parses CLI arguments and delegates to the package-level `sys_info`
    function which prints system and dependency information.
    """
    parser = argparse.ArgumentParser(
        prog=f"{__package__.split('.')[0]}-sys_info",
        description="Print platform, hardware and dependency information.",
    )
    parser.add_argument(
        "--developer",
        help="also list the optional test, doc and style dependencies",
        action="store_true",
    )
    args = parser.parse_args()

    sys_info(developer=args.developer)


if __name__ == "__main__":
    run()
