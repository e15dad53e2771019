import argparse
import logging

from .. import config
from ..adapters import filesystem
from ..adapters.inventory import InventoryReader
from ..domain import actions
from ..errors import NotFoundError, SyncError
from ..service_layer import services
from ..service_layer.applier import FailurePolicy

logger = logging.getLogger(__name__)


def describe(action: actions.Action) -> str:
    if isinstance(action, actions.Copy):
        return f'copy {action.source} -> {action.dest}'
    if isinstance(action, actions.Move):
        return f'move {action.old} -> {action.new}'
    return f'delete {action.name}'


def build_parser():
    parser = argparse.ArgumentParser(
        prog='dirsync',
        description='Make DEST match SOURCE, moving renamed files instead of copying them again.',
    )
    parser.add_argument('source', help='directory to read from')
    parser.add_argument('dest', help='directory to bring in line with SOURCE')
    parser.add_argument('--dry-run', action='store_true',
                        help='print the actions that would be taken and change nothing')
    parser.add_argument('--keep-going', action='store_true',
                        help='carry on after a failed action and report all failures at the end')
    parser.add_argument('--strict', action='store_true',
                        help='refuse to overwrite files or act on files that have gone')
    parser.add_argument('--log-level', default=None, type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='logging level (default: $DIRSYNC_LOG_LEVEL or INFO)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        logging.getLogger().setLevel(args.log_level or config.get_log_level())
        reader = InventoryReader()
    except ValueError as e:
        logger.error('bad configuration: %s', e)
        return 2

    if args.dry_run:
        fs = filesystem.RecordingFileSystem()
    else:
        fs = filesystem.LocalFileSystem(strict=args.strict)
    policy = FailurePolicy.CONTINUE if args.keep_going else FailurePolicy.FAIL_FAST

    try:
        report = services.sync(args.source, args.dest, reader=reader, fs=fs, policy=policy)
    except NotFoundError as e:
        logger.error('%s', e)
        return 2
    except SyncError as e:
        applied = len(e.report.applied) if e.report else 0
        logger.error('sync aborted after %d actions: %s', applied, e)
        return 1

    if args.dry_run:
        for action in report.applied:
            print(describe(action))

    for action, error in report.failures:
        logger.error('%s failed: %s', describe(action), error)
    return 0 if report.ok else 1
