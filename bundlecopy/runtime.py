import os
from pathlib import Path

from .error import PrintableError
from . import display
from . import parser
from .plugin import BuildContext


class Runtime:
    def __init__(self, args, env):
        self._set_paths(args, env)

        if args['--quiet'] and args['--verbose']:
            raise CommandLineError(
                "bundlecopy can't be quiet and verbose at the same time.")
        self.quiet = args['--quiet']
        self.verbose = args['--verbose']

        self.display = get_display(args)

    def _set_paths(self, args, env):
        explicit_project_file = args['--file'] or env.get('BUNDLECOPY_FILE')
        explicit_basename = args['--file-basename']
        if explicit_project_file and explicit_basename:
            raise CommandLineError(
                'Cannot use both --file and --file-basename at the same time.')
        if explicit_project_file:
            self.project_file = explicit_project_file
        else:
            basename = explicit_basename or parser.DEFAULT_PROJECT_FILE_NAME
            self.project_file = find_project_file(os.getcwd(), basename)
        # Relative paths in the project file are interpreted from the
        # directory that contains it, not from the cwd. Path.parent (unlike
        # os.path.dirname) gives '.' rather than '' for a bare filename.
        self.project_dir = str(Path(self.project_file).parent)

    def apply_flags(self, config):
        '''The --verbose and --quiet flags take precedence over the verbose
        setting in the project file.'''
        if self.verbose:
            return config._replace(verbose=True)
        if self.quiet:
            return config._replace(verbose=False)
        return config

    def get_build_context(self, output_dir):
        return BuildContext(
            cwd=self.project_dir, output_dir=output_dir, display=self.display)


def find_project_file(start_dir, basename):
    '''Walk up the directory tree until we find a file of the given name.'''
    prefix = os.path.abspath(start_dir)
    while True:
        candidate = os.path.join(prefix, basename)
        if os.path.isfile(candidate):
            return candidate
        if os.path.exists(candidate):
            raise PrintableError(
                "Found {}, but it's not a file.".format(candidate))
        if os.path.dirname(prefix) == prefix:
            # We've walked all the way to the top. Bail.
            raise PrintableError("Can't find " + basename)
        # Not found at this level. We must go...shallower.
        prefix = os.path.dirname(prefix)


def get_display(args):
    if args['--quiet']:
        return display.QuietDisplay()
    return display.Display()


class CommandLineError(PrintableError):
    pass
