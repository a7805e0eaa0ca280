import argparse
import sys

from bookshop.core.bootstrap import default_builder, run_app


def main(argv=None) -> int:
    argv = list(sys.argv if argv is None else argv)
    parser = argparse.ArgumentParser(prog="bookshop", description="BookShop inventory client")
    parser.add_argument("--config", default="config.json", help="path to config.json")
    parser.add_argument("--page", help="page to open on launch, e.g. Orders")
    options, _ = parser.parse_known_args(argv[1:])
    return run_app(default_builder(options.config), argv)
