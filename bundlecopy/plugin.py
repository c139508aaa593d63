from collections import namedtuple
import os

from .copier import copy_pairs
from .error import ConfigError
from .targets import parse_targets, resolve_pairs

Configuration = namedtuple('Configuration',
                           ['targets', 'output_folder', 'verbose'])

# Everything a plugin hook needs to know about the build it's running in. The
# host creates one of these for each build, so hooks never have to go looking
# for the output directory themselves.
BuildContext = namedtuple('BuildContext', ['cwd', 'output_dir', 'display'])


def copy(targets=None, *, output_folder=None, verbose=False):
    '''Create the copy plugin. `targets` is either a list of source paths,
    which get copied into the output directory under their own names, or a
    map of source paths to destination paths. If `output_folder` is given,
    it's used instead of the output directory for list targets, and prepended
    to the destinations of map targets. With `verbose`, every finished copy
    gets printed.'''
    return CopyPlugin(make_configuration(targets, output_folder, verbose))


def make_configuration(targets=None, output_folder=None, verbose=False):
    if output_folder is not None:
        try:
            output_folder = os.fspath(output_folder)
        except TypeError:
            raise ConfigError('Output folder must be a path, not {}.',
                              repr(output_folder)) from None
    if not isinstance(verbose, bool):
        raise ConfigError('Verbose must be true or false, not {}.',
                          repr(verbose))
    return Configuration(parse_targets(targets), output_folder or None,
                         verbose)


class CopyPlugin:
    name = 'copy'

    def __init__(self, config):
        self.config = config

    def get_pairs(self, output_dir):
        # Computed fresh on every call, so repeated builds never reuse a
        # stale list.
        return resolve_pairs(self.config.targets, self.config.output_folder,
                             output_dir)

    async def on_outputs_written(self, context):
        pairs = self.get_pairs(context.output_dir)
        await copy_pairs(pairs, context.display, cwd=context.cwd,
                         verbose=self.config.verbose)
