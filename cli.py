from assetsweep.config import ConfigurationError, DeletionConfig
from assetsweep.lambdas.asset_deletion.app import handle_delete_assets
from assetsweep.models.deletion import DeletionRequest
from assetsweep.models.paths import InvalidOperatingSystem, OperatingSystem
from assetsweep.services.path_registry import (
    LocalPathRegistry,
    LocalStorage,
    PathRegistryError,
    RemotePathRegistry,
)
import argparse
import json
import logging
import sys

DEFAULT_STORE = "paths_storage.json"


# run pip install -e .
# then do your thing
def _registry(args):
    if args.remote:
        return RemotePathRegistry(args.remote)
    return LocalPathRegistry(LocalStorage(args.store))


def _parse_selection(raw: str, remote: bool):
    """OS:ID where ID is a list index locally and the path itself remotely."""
    os_name, sep, ident = raw.partition(":")
    if not sep or not ident:
        raise ValueError(f"selection '{raw}' must look like OS:ID")
    if remote:
        return os_name, ident
    try:
        return os_name, int(ident)
    except ValueError:
        raise ValueError(f"selection '{raw}' needs a numeric index for the local store")


def add_path(args):
    registry = _registry(args)
    if registry.add_path(args.path, args.os):
        print(f"Added {args.path.strip()} to {args.os}")
    else:
        print("Nothing added (empty or already present)")


def list_paths(args):
    paths = _registry(args).load_paths()
    if args.all:
        print(paths)
        return
    # one OS view at a time, like the page's tabs
    print(f"[{args.os}]")
    for index, path in enumerate(paths.paths_for(args.os)):
        print(f"  {index}: {path}")


def delete_paths(args):
    selection = [_parse_selection(s, bool(args.remote)) for s in args.select]
    removed = _registry(args).delete_selected(selection)
    print(f"Deleted {removed} path(s)")


def delete_assets(args):
    config = DeletionConfig.from_env()
    response = handle_delete_assets(DeletionRequest(ip_addresses=args.ips), config)
    print(json.loads(response["body"]))
    if response["statusCode"] != 200:
        sys.exit(1)


def _add_store_args(parser):
    parser.add_argument(
        '--remote',
        help='Base URL of the path API; uses the local store when omitted'
    )
    parser.add_argument(
        '--store',
        default=DEFAULT_STORE,
        help=f'Local storage file (default: {DEFAULT_STORE})'
    )


def main():
    parser = argparse.ArgumentParser(
        prog='assetsweep',
        description='Manage the per-OS path registry and request scanner '
        '          asset deletion by IP address'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )
    os_choices = [o.value for o in OperatingSystem]

    paths_parser = subparsers.add_parser('paths', help='Path registry operations')
    paths_sub = paths_parser.add_subparsers(dest='paths_command')

    add_parser = paths_sub.add_parser('add', help='Register a path for an OS')
    add_parser.add_argument('path')
    add_parser.add_argument('--os', choices=os_choices, required=True)
    _add_store_args(add_parser)
    add_parser.set_defaults(func=add_path)

    list_parser = paths_sub.add_parser('list', help='Show the paths for one OS')
    list_parser.add_argument('--os', choices=os_choices, default=OperatingSystem.WINDOWS.value)
    list_parser.add_argument('--all', action='store_true', help='Show every OS bucket as JSON')
    _add_store_args(list_parser)
    list_parser.set_defaults(func=list_paths)

    del_parser = paths_sub.add_parser('delete', help='Delete selected paths')
    del_parser.add_argument(
        '--select',
        nargs='+',
        required=True,
        metavar='OS:ID',
        help='Index (local store) or path (remote) to delete, e.g. windows:0'
    )
    _add_store_args(del_parser)
    del_parser.set_defaults(func=delete_paths)

    assets_parser = subparsers.add_parser(
        'delete-assets',
        help='Request deletion of scanner assets matching the given IPs'
    )
    assets_parser.add_argument('ips', nargs='+', metavar='IP')
    assets_parser.set_defaults(func=delete_assets)

    args = parser.parse_args()

    if args.command is None or not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    try:
        args.func(args)
    except (ConfigurationError, PathRegistryError, InvalidOperatingSystem, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
