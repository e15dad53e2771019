import os

DEFAULT_HASH_ALGORITHM = 'sha1'
DEFAULT_BLOCK_SIZE = 65536
DEFAULT_LOG_LEVEL = 'INFO'


def get_hash_algorithm():
    return os.environ.get('DIRSYNC_HASH_ALGORITHM', DEFAULT_HASH_ALGORITHM)


def get_block_size():
    raw = os.environ.get('DIRSYNC_BLOCK_SIZE', str(DEFAULT_BLOCK_SIZE))
    try:
        block_size = int(raw)
    except ValueError:
        raise ValueError(f'DIRSYNC_BLOCK_SIZE must be an integer, got {raw!r}')
    if block_size <= 0:
        raise ValueError(f'DIRSYNC_BLOCK_SIZE must be positive, got {block_size}')
    return block_size


def get_log_level():
    return os.environ.get('DIRSYNC_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
