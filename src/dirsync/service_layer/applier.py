from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from ..adapters import filesystem
from ..domain import actions
from ..errors import SyncError

logger = logging.getLogger(__name__)


class FailurePolicy(enum.Enum):
    FAIL_FAST = 'fail-fast'
    CONTINUE = 'continue'


@dataclass
class ApplyReport:
    applied: List[actions.Action] = field(default_factory=list)
    failures: List[Tuple[actions.Action, SyncError]] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self):
        return not self.failures and not self.cancelled


def copy(action: actions.Copy, fs, source_root, dest_root):
    fs.copy(source_root / action.source, dest_root / action.dest)


def move(action: actions.Move, fs, source_root, dest_root):
    fs.move(dest_root / action.old, dest_root / action.new)


def delete(action: actions.Delete, fs, source_root, dest_root):
    fs.delete(dest_root / action.name)


HANDLERS = {
    actions.Copy: copy,
    actions.Move: move,
    actions.Delete: delete,
}  # type: Dict[Type[actions.Action], Callable]


class ActionApplier:
    """Applies actions one at a time, in the order they are given.

    Later actions can depend on the effects of earlier ones, so there is no
    reordering or batching. Under ``FailurePolicy.FAIL_FAST`` the first
    failure is re-raised; under ``FailurePolicy.CONTINUE`` failures are
    collected in the report and the remaining actions are still applied.
    """

    def __init__(
        self,
        fs: filesystem.AbstractFileSystem,
        source_root,
        dest_root,
        policy: FailurePolicy = FailurePolicy.FAIL_FAST,
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        self.fs = fs
        self.source_root = Path(source_root)
        self.dest_root = Path(dest_root)
        self.policy = policy
        self.should_stop = should_stop

    def apply(self, to_apply: Iterable[actions.Action]) -> ApplyReport:
        report = ApplyReport()
        for action in to_apply:
            if self.should_stop is not None and self.should_stop():
                logger.warning('stopping before %s: cancelled', action)
                report.cancelled = True
                break
            handler = HANDLERS[type(action)]
            try:
                handler(action, self.fs, self.source_root, self.dest_root)
            except SyncError as e:
                if self.policy is FailurePolicy.FAIL_FAST:
                    logger.error('failed to apply %s after %d applied: %s',
                                 action, len(report.applied), e)
                    e.report = report
                    raise
                logger.warning('failed to apply %s, continuing: %s', action, e)
                report.failures.append((action, e))
                continue
            logger.info('applied %s', action)
            report.applied.append(action)
        return report
