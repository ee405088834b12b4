"""Entry points for the kjx CLI."""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from dependency_injector import providers

from kubejax import __version__
from kubejax.config.settings import KubeJaxSettings
from kubejax.container import container, get_context_switcher, get_namespace_switcher
from kubejax.exceptions import KubeJaxError
from kubejax.orchestrator import EXIT_FAILURE, EXIT_OK, SwitchMode
from kubejax.shell import InstallResult, detect_profile_file, install_shell_function, render_shell_function

LOGGER = logging.getLogger("kubejax.cli")

PROG = "kjx"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

SUBCOMMANDS_HELP = """subcommands:
  ns [name]       switch the namespace of the current context (see kjx ns -h)
  shell-init      print the shell function that exports KUBECONFIG
  install         append the shell function to ~/.zshrc or ~/.bashrc
"""


def _add_global_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--config-dir",
        type=Path,
        default=None,
        help="Directory containing kubeconfig files (default: ~/.kube/configs).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    parser.add_argument(
        "--output-config",
        type=Path,
        default=None,
        help="Write the selected kubeconfig path to this file (used by the shell function).",
    )


def _add_selection_flags(parser: argparse.ArgumentParser, noun: str) -> None:
    parser.add_argument("-i", "--interactive", action="store_true", help=f"Choose the {noun} from a menu.")
    parser.add_argument("-l", "--list", action="store_true", help=f"List available {noun}s.")
    parser.add_argument("-c", "--current", action="store_true", help=f"Show the current {noun} and exit.")
    parser.add_argument(
        "-s",
        "--search",
        action="store_true",
        help=f"Search {noun}s by substring; without a term, pick from a filterable menu.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Switch Kubernetes contexts across a directory of kubeconfig files.",
        epilog=SUBCOMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Context to switch to, '-' for the previous context, or a search term with -s.",
    )
    _add_global_flags(parser)
    _add_selection_flags(parser, "context")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(handler=_handle_context)
    return parser


def build_ns_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{PROG} ns",
        description="Switch the namespace of the current context.",
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Namespace to switch to, '-' for the previous namespace, or a search term with -s.",
    )
    _add_global_flags(parser)
    _add_selection_flags(parser, "namespace")
    parser.set_defaults(handler=_handle_namespace)
    return parser


def build_shell_init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{PROG} shell-init",
        description="Print the kjx shell function. Add it to your shell with: eval \"$(kjx shell-init)\"",
    )
    _add_global_flags(parser)
    parser.set_defaults(handler=_handle_shell_init)
    return parser


def build_install_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{PROG} install",
        description="Append the kjx shell function to ~/.zshrc or ~/.bashrc, based on $SHELL.",
    )
    _add_global_flags(parser)
    parser.set_defaults(handler=_handle_install)
    return parser


# A root positional and subparsers cannot share one argparse parser, so
# subcommands are dispatched by hand.
SUBCOMMAND_PARSERS: dict[str, Callable[[], argparse.ArgumentParser]] = {
    "ns": build_ns_parser,
    "shell-init": build_shell_init_parser,
    "install": build_install_parser,
}

# Global options that may come before a subcommand, as the shell function
# passes --output-config ahead of the user's arguments.
GLOBAL_VALUE_OPTIONS = ("-d", "--config-dir", "--output-config")
GLOBAL_SWITCHES = ("-v", "--verbose")


def _mode_from_args(args: argparse.Namespace) -> SwitchMode:
    return SwitchMode.from_flags(
        current=args.current,
        search=args.search,
        list_=args.list,
        interactive=args.interactive,
        argument=args.name,
    )


def _settings_from_args(args: argparse.Namespace) -> KubeJaxSettings:
    settings = KubeJaxSettings.from_environment()
    updates = {}
    if args.config_dir is not None:
        updates["config_dir"] = args.config_dir.expanduser()
    if args.output_config is not None:
        updates["output_config"] = args.output_config.expanduser()
    return settings.model_copy(update=updates) if updates else settings


def _handle_context(args: argparse.Namespace) -> int:
    return get_context_switcher().run(_mode_from_args(args), args.name)


def _handle_namespace(args: argparse.Namespace) -> int:
    return get_namespace_switcher().run(_mode_from_args(args), args.name)


def _handle_shell_init(args: argparse.Namespace) -> int:
    print(render_shell_function())
    return EXIT_OK


def _handle_install(args: argparse.Namespace) -> int:
    profile_file = detect_profile_file()
    try:
        result = install_shell_function(profile_file)
    except KubeJaxError as e:
        print(f"Error: {e}")
        return EXIT_FAILURE

    if result is InstallResult.UNSUPPORTED_SHELL:
        print("Unsupported shell. Add this to your shell profile manually:")
        print()
        print(render_shell_function())
        return EXIT_FAILURE

    if result is InstallResult.ALREADY_INSTALLED:
        print(f"Shell function already installed in {profile_file}")
        return EXIT_OK

    print(f"Shell function installed to {profile_file}")
    print(f"Run 'source {profile_file}' or restart your terminal to use it")
    return EXIT_OK


def _configure_logging(verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger("kubejax")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler


def _is_attached_value(arg: str) -> bool:
    # --config-dir=DIR, --output-config=FILE, -dDIR
    return arg.startswith(("--config-dir=", "--output-config=")) or (arg.startswith("-d") and len(arg) > 2)


def find_subcommand(argv: Sequence[str]) -> tuple[str | None, list[str]]:
    """
    Locate a subcommand that follows only global options.

    Returns the subcommand name and the remaining arguments with the leading
    global options kept in place, or ``(None, argv)`` when the first other
    argument is not a subcommand.
    """
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg in SUBCOMMAND_PARSERS:
            return arg, [*argv[:index], *argv[index + 1 :]]
        if arg in GLOBAL_VALUE_OPTIONS:
            index += 2
        elif arg in GLOBAL_SWITCHES or _is_attached_value(arg):
            index += 1
        else:
            break
    return None, list(argv)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    subcommand, remaining = find_subcommand(argv)
    if subcommand is not None:
        return SUBCOMMAND_PARSERS[subcommand]().parse_args(remaining)
    return build_parser().parse_args(remaining)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))

    handler = _configure_logging(args.verbose)
    kubejax_logger = logging.getLogger("kubejax")
    try:
        try:
            settings = _settings_from_args(args)
        except KubeJaxError as e:
            print(f"Error: {e}")
            return EXIT_FAILURE

        LOGGER.debug(f"Settings: {settings!r}")

        container.reset_singletons()
        with container.settings.override(providers.Object(settings)):
            return args.handler(args)
    finally:
        kubejax_logger.removeHandler(handler)
        kubejax_logger.setLevel(logging.NOTSET)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
