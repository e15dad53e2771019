import abc
import os
import shutil
from pathlib import Path

from ..errors import ConflictError, NotFoundError, StorageIOError


class AbstractFileSystem(abc.ABC):

    @abc.abstractmethod
    def copy(self, src: Path, dest: Path):
        raise NotImplementedError

    @abc.abstractmethod
    def move(self, src: Path, dest: Path):
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, dest: Path):
        raise NotImplementedError


def _translate(exc: OSError, verb, path):
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(f'cannot {verb} {path}: no such file')
    return StorageIOError(f'cannot {verb} {path}: {exc.strerror or exc}')


class LocalFileSystem(AbstractFileSystem):
    """Performs real file operations.

    With ``strict`` set, refuses to overwrite existing files and reports a
    vanished source as a conflict rather than a missing file.
    """

    def __init__(self, strict=False):
        self.strict = strict

    def copy(self, src, dest):
        src, dest = Path(src), Path(dest)
        if self.strict and (dest.exists() or dest.is_symlink()):
            raise ConflictError(f'cannot copy onto {dest}: file already exists')
        if dest.is_dir() and not dest.is_symlink():
            raise StorageIOError(f'cannot copy onto {dest}: is a directory')
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            # replace a link rather than write through it
            if dest.is_symlink():
                dest.unlink()
            shutil.copyfile(src, dest)
        except OSError as exc:
            raise _translate(exc, 'copy', src) from exc

    def move(self, src, dest):
        src, dest = Path(src), Path(dest)
        if self.strict:
            if not src.exists():
                raise ConflictError(f'cannot move {src}: file has gone')
            if dest.exists() or dest.is_symlink():
                raise ConflictError(f'cannot move onto {dest}: file already exists')
        if dest.is_dir() and not dest.is_symlink():
            raise StorageIOError(f'cannot move onto {dest}: is a directory')
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            os.replace(src, dest)
        except OSError as exc:
            raise _translate(exc, 'move', src) from exc

    def delete(self, dest):
        dest = Path(dest)
        if self.strict and not dest.exists():
            raise ConflictError(f'cannot delete {dest}: file has gone')
        try:
            os.remove(dest)
        except OSError as exc:
            raise _translate(exc, 'delete', dest) from exc


class RecordingFileSystem(list, AbstractFileSystem):
    """Records the operations it is asked to perform and performs none."""

    def copy(self, src, dest):
        self.append(('COPY', src, dest))

    def move(self, src, dest):
        self.append(('MOVE', src, dest))

    def delete(self, dest):
        self.append(('DELETE', dest))
