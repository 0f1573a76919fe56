"""Entry point for the capnet command."""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigLoader, OrchestrationOptions, load_config
from .errors import CapnetError
from .network import Network


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="capnet",
        description="Isolate components and their dependencies into capsules",
    )
    parser.add_argument("ids", nargs="+", help="Seed component ids (name@version)")
    parser.add_argument(
        "--project", type=Path, default=None, help="Workspace or scope directory"
    )
    parser.add_argument("--base-dir", type=Path, default=None, help="Capsules root")
    parser.add_argument("--name", default=None, help="Explicit capsule suffix")
    parser.add_argument(
        "--new", action="store_true", help="Always create fresh capsules"
    )
    parser.add_argument(
        "--no-install", action="store_true", help="Skip package installs"
    )
    parser.add_argument("--package-manager", default=None)
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store the capsule options from these flags in the project capnet.yaml",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run capnet and print one ``id -> capsule dir`` line per capsule."""
    args = build_parser().parse_args(argv)
    project_path = args.project.resolve() if args.project else Path.cwd()

    config = load_config(project_path)
    overrides: dict = {}
    if args.base_dir:
        overrides["base_dir"] = args.base_dir.resolve()
    if args.no_install:
        overrides["install_packages"] = False
    if args.package_manager:
        overrides["package_manager"] = args.package_manager
    if args.verbose:
        overrides["verbose"] = True

    verbose = args.verbose or config.capsule.verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.save_config:
        ConfigLoader(project_path).save(
            config.model_copy(update={"capsule": config.capsule.merged(overrides)})
        )

    network = Network.provide(config, project_path=project_path)
    try:
        sub_network = network.create_sub_network(
            args.ids,
            overrides,
            OrchestrationOptions(always_new=args.new, name=args.name),
        )
    except CapnetError as e:
        logging.getLogger(__name__).error(str(e))
        return 1

    for component_id, capsule in sub_network.capsules.items():
        print(f"{component_id} -> {capsule.wrk_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
