from pathlib import Path

import pytest

from dirsync.adapters.filesystem import RecordingFileSystem
from dirsync.domain.actions import Copy, Delete, Move
from dirsync.errors import ConflictError, StorageIOError
from dirsync.service_layer.applier import ActionApplier, FailurePolicy

SOURCE = Path('/src')
DEST = Path('/dst')


class FailingFileSystem(RecordingFileSystem):
    def __init__(self, fail_on, error=StorageIOError('disk full')):
        super().__init__()
        self.fail_on = fail_on
        self.error = error

    def copy(self, src, dest):
        if dest.name == self.fail_on:
            raise self.error
        super().copy(src, dest)

    def move(self, src, dest):
        if dest.name == self.fail_on:
            raise self.error
        super().move(src, dest)

    def delete(self, dest):
        if dest.name == self.fail_on:
            raise self.error
        super().delete(dest)


def make_applier(fs, **kwargs):
    return ActionApplier(fs, SOURCE, DEST, **kwargs)


def test_copy_reads_from_source_root_and_writes_to_dest_root():
    fs = RecordingFileSystem()
    make_applier(fs).apply([Copy('sub/a', 'sub/a')])
    assert fs == [('COPY', SOURCE / 'sub/a', DEST / 'sub/a')]


def test_move_stays_within_dest_root():
    fs = RecordingFileSystem()
    make_applier(fs).apply([Move('old', 'new')])
    assert fs == [('MOVE', DEST / 'old', DEST / 'new')]


def test_delete_targets_dest_root():
    fs = RecordingFileSystem()
    make_applier(fs).apply([Delete('gone')])
    assert fs == [('DELETE', DEST / 'gone')]


def test_actions_are_applied_in_the_order_given():
    fs = RecordingFileSystem()
    actions = [Delete('z'), Copy('a', 'a'), Move('b', 'c'), Delete('y')]

    report = make_applier(fs).apply(actions)

    assert fs == [
        ('DELETE', DEST / 'z'),
        ('COPY', SOURCE / 'a', DEST / 'a'),
        ('MOVE', DEST / 'b', DEST / 'c'),
        ('DELETE', DEST / 'y'),
    ]
    assert report.applied == actions
    assert report.ok


def test_fails_fast_by_default():
    fs = FailingFileSystem(fail_on='b')
    actions = [Copy('a', 'a'), Copy('b', 'b'), Copy('c', 'c')]

    with pytest.raises(StorageIOError, match='disk full'):
        make_applier(fs).apply(actions)

    assert fs == [('COPY', SOURCE / 'a', DEST / 'a')]


def test_continue_policy_collects_failures_and_carries_on():
    fs = FailingFileSystem(fail_on='b', error=ConflictError('b changed'))
    actions = [Copy('a', 'a'), Move('x', 'b'), Delete('c')]

    report = make_applier(fs, policy=FailurePolicy.CONTINUE).apply(actions)

    assert fs == [('COPY', SOURCE / 'a', DEST / 'a'), ('DELETE', DEST / 'c')]
    assert report.applied == [Copy('a', 'a'), Delete('c')]
    assert [action for action, _ in report.failures] == [Move('x', 'b')]
    assert isinstance(report.failures[0][1], ConflictError)
    assert not report.ok


def test_programming_errors_are_not_collected():
    fs = FailingFileSystem(fail_on='a', error=TypeError('bug'))

    with pytest.raises(TypeError):
        make_applier(fs, policy=FailurePolicy.CONTINUE).apply([Copy('a', 'a')])


def test_stops_between_actions_when_asked():
    fs = RecordingFileSystem()
    actions = [Copy('a', 'a'), Copy('b', 'b'), Copy('c', 'c')]

    report = make_applier(fs, should_stop=lambda: len(fs) >= 2).apply(actions)

    assert len(fs) == 2
    assert report.applied == actions[:2]
    assert report.cancelled
    assert not report.ok


def test_consumes_a_generator_once():
    fs = RecordingFileSystem()
    report = make_applier(fs).apply(Delete(n) for n in ['a', 'b'])
    assert report.applied == [Delete('a'), Delete('b')]


def test_fail_fast_error_carries_what_was_already_applied():
    fs = FailingFileSystem(fail_on='c')
    actions = [Copy('a', 'a'), Move('x', 'b'), Delete('c'), Delete('d')]

    with pytest.raises(StorageIOError) as exc_info:
        make_applier(fs).apply(actions)

    assert exc_info.value.report.applied == [Copy('a', 'a'), Move('x', 'b')]
