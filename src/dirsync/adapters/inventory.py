from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

from .. import config
from ..domain import model
from ..errors import NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


def hash_file(path: Path, algorithm=config.DEFAULT_HASH_ALGORITHM,
              block_size=config.DEFAULT_BLOCK_SIZE) -> model.ContentHash:
    hasher = hashlib.new(algorithm)
    with path.open('rb') as file:
        buf = file.read(block_size)
        while buf:
            hasher.update(buf)
            buf = file.read(block_size)
    return hasher.hexdigest()


def _raise_walk_error(exc: OSError):
    raise StorageIOError(f'cannot list {exc.filename}: {exc.strerror}') from exc


class InventoryReader:
    """Builds a Snapshot of every regular file under a root directory.

    Symlinks are skipped and symlinked directories are not followed. When two
    files share content, the one visited last is kept. Any read failure aborts
    the whole walk.
    """

    def __init__(self, algorithm=None, block_size=None):
        self.algorithm = algorithm or config.get_hash_algorithm()
        self.block_size = block_size or config.get_block_size()
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f'unknown hash algorithm {self.algorithm!r}')
        if hashlib.new(self.algorithm).digest_size == 0:
            raise ValueError(f'hash algorithm {self.algorithm!r} has no fixed digest size')

    def __call__(self, root) -> model.Snapshot:
        root = Path(root)
        if not root.exists():
            raise NotFoundError(f'{root} does not exist')
        if not root.is_dir():
            raise NotFoundError(f'{root} is not a directory')

        hashes = {}
        for folder, _, files in os.walk(root, onerror=_raise_walk_error):
            for fn in files:
                path = Path(folder) / fn
                if path.is_symlink() or not path.is_file():
                    continue
                try:
                    sha = hash_file(path, self.algorithm, self.block_size)
                except OSError as exc:
                    raise StorageIOError(f'cannot read {path}: {exc.strerror}') from exc
                name = path.relative_to(root).as_posix()
                logger.debug('hashed %s -> %s', name, sha)
                hashes[sha] = name

        logger.info('read %d entries from %s', len(hashes), root)
        return model.Snapshot(hashes)
