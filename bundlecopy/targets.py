from collections import namedtuple
from collections.abc import Mapping
import os

from .error import ConfigError

CopyPair = namedtuple('CopyPair', ['source', 'destination'])

# The two shapes a targets declaration can take. A list of sources copies
# each one into the output directory under its own name. A mapping gives an
# explicit destination for every source. Mappings are stored as a tuple of
# (source, destination) items, to keep the declared order and stay immutable.
ListTargets = namedtuple('ListTargets', ['sources'])
MapTargets = namedtuple('MapTargets', ['mapping'])


def parse_targets(raw):
    '''Validate a user's targets declaration and tag it with its shape. None
    means no targets at all, and so do empty lists and mappings.'''
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        mapping = tuple((_path_field(source, 'source'),
                         _path_field(dest, 'destination'))
                        for source, dest in raw.items())
        return MapTargets(mapping)
    if isinstance(raw, (list, tuple)):
        return ListTargets(tuple(_path_field(s, 'source') for s in raw))
    raise ConfigError(
        'Targets must be a list of paths or a map of source paths to '
        'destination paths, not {}.', repr(raw))


def _path_field(value, kind):
    try:
        path = os.fspath(value)
    except TypeError:
        raise ConfigError('Target {} must be a path, not {}.', kind,
                          repr(value)) from None
    if not isinstance(path, str):
        path = os.fsdecode(path)
    if not path:
        raise ConfigError('Target {} must not be empty.', kind)
    return path


def resolve_pairs(targets, output_folder=None, output_dir=None):
    '''Turn parsed targets into the ordered list of CopyPairs to execute.
    This only computes paths; nothing is checked against the filesystem.

    List targets land in `output_folder` if it's set, or else in the host's
    `output_dir`, under their own basename. Map targets land at their
    destination as written, with `output_folder` prepended if it's set.'''
    if targets is None:
        return []
    if isinstance(targets, ListTargets):
        base = output_folder or output_dir
        return [
            CopyPair(source, _join(base, _basename(source)))
            for source in targets.sources
        ]
    return [
        CopyPair(source, _join(output_folder, dest))
        for source, dest in targets.mapping
    ]


def _basename(path):
    # 'src/assets/scss/' should still be called 'scss'.
    return os.path.basename(path.rstrip('/' + os.sep)) or path


def _join(base, path):
    if not base:
        return path
    # A leading slash must not escape the prefix.
    return os.path.normpath(os.path.join(base, path.lstrip('/' + os.sep)))
