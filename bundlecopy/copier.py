import os
import shutil
import stat

from .async_helpers import run_in_thread
from . import compat
from .error import CopyError, NotFoundError

COPIED_BANNER = 'Copied files and folders:'


async def copy_pairs(pairs, display, *, cwd, verbose):
    '''Copy every pair, one at a time and in order. The first failure stops
    the whole run, and anything copied before it stays where it is. Note that
    cwd is a required keyword-only argument: relative paths are always
    interpreted from a directory the caller chose, never from wherever the
    process happens to be running.'''
    if verbose and pairs:
        display.print(COPIED_BANNER)
    for pair in pairs:
        await copy_pair(pair, cwd=cwd)
        if verbose:
            display.print_green('{} -> {}'.format(pair.source,
                                                  pair.destination))


async def copy_pair(pair, *, cwd):
    source = os.path.join(cwd, pair.source)
    dest = os.path.join(cwd, pair.destination)
    try:
        source_stat = await run_in_thread(os.stat, source)
    except FileNotFoundError:
        # Report the path as declared, not joined with cwd.
        raise NotFoundError(pair.source) from None
    if stat.S_ISDIR(source_stat.st_mode):
        _check_not_into_itself(pair, source, dest)
        await run_in_thread(_copy_tree, source, dest)
    else:
        await run_in_thread(_copy_file, source, dest)


def _check_not_into_itself(pair, source, dest):
    source = os.path.realpath(source)
    dest = os.path.realpath(dest)
    if dest == source or dest.startswith(source.rstrip(os.sep) + os.sep):
        raise CopyError("Cannot copy '{}' to a subdirectory of itself, '{}'.",
                        pair.source, pair.destination)


def _copy_tree(source, dest):
    # copytree creates dest and all of its missing parents. Files that already
    # exist in dest get overwritten.
    shutil.copytree(source, dest, symlinks=True, dirs_exist_ok=True)


def _copy_file(source, dest):
    compat.makedirs(os.path.dirname(dest))
    shutil.copyfile(source, dest)
    shutil.copymode(source, dest)
