class SyncError(Exception):
    # set by the applier when it stops part way through
    report = None


class NotFoundError(SyncError):
    pass


class StorageIOError(SyncError):
    pass


class ConflictError(SyncError):
    pass
