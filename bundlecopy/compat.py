import os
import sys


# Computed at load time, so that later chdirs (as we do in tests) don't
# invalidate it.
MODULE_ROOT = os.path.abspath(os.path.dirname(__file__))


def makedirs(path):
    '''Like `mkdir -p`. Creating a directory that already exists is a no-op,
    and so is an empty path, which means "the current directory".'''
    path = str(path)  # compatibility with pathlib
    if path:
        os.makedirs(path, exist_ok=True)


def is_fancy_terminal(stream=None):
    '''The Windows terminal does not support most of the fancy things we want
    to do with colors and formatting. This is a quick and dirty way to make
    sure we default to simple output on Windows.'''
    stream = stream or sys.stdout
    return stream.isatty() and os.name != 'nt'
