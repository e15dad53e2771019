from __future__ import annotations

import logging
from pathlib import Path

from ..adapters import filesystem
from ..adapters.inventory import InventoryReader
from ..domain import model
from .applier import ActionApplier, ApplyReport, FailurePolicy

logger = logging.getLogger(__name__)


def sync(
    source_root,
    dest_root,
    reader=None,
    fs: filesystem.AbstractFileSystem = None,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    should_stop=None,
) -> ApplyReport:
    source_root, dest_root = Path(source_root), Path(dest_root)
    reader = reader or InventoryReader()
    fs = fs if fs is not None else filesystem.LocalFileSystem()

    # imperative shell step 1, gather inputs
    source_hashes = reader(source_root)
    dest_hashes = reader(dest_root)

    # step 2: call functional core
    to_apply = model.determine_actions(source_hashes, dest_hashes)

    # imperative shell step 3, apply outputs
    applier = ActionApplier(fs, source_root, dest_root, policy, should_stop)
    report = applier.apply(to_apply)

    logger.info(
        'synced %s -> %s: %d applied, %d failed%s',
        source_root, dest_root, len(report.applied), len(report.failures),
        ', cancelled' if report.cancelled else '',
    )
    return report
