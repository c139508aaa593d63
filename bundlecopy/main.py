#! /usr/bin/env python3

import collections
import json
import os
import sys

import docopt

# Keep this import above the others, because async_helpers sets up the global
# event loop at import time.
from .async_helpers import run_task

from . import build
from . import compat
from .error import PrintableError
from . import parser
from .plugin import CopyPlugin
from .runtime import Runtime

__doc__ = '''\
Usage:
    bundlecopy [-hqv] [--file=<file>] [--file-basename=<name>]
               <command> [<args>...]
    bundlecopy [--help|--version]

Commands:
    build     write the bundle outputs and copy targets next to them
    copy      copy targets without writing the bundle outputs
    targets   list where each target will be copied
    help      show help for subcommands, same as -h/--help

Options:
    -h --help             so much help
    -q --quiet            don't print anything
    -v --verbose          print every copied file and folder

    --file=<file>
        The project file to use instead of 'bundlecopy.yaml'. Relative paths
        in it are interpreted from the directory that contains it. Defaults
        to $BUNDLECOPY_FILE if it's defined.
    --file-basename=<name>
        An alternative filename (not a path) for 'bundlecopy.yaml'. As usual,
        bundlecopy will search the current dir and its parents for this file.
        Incompatible with --file.
'''


def bundlecopy_command(name, doc):
    def decorator(f):
        COMMAND_FNS[name] = f
        COMMAND_DOCS[name] = doc
        return f

    return decorator


COMMAND_FNS = {}
COMMAND_DOCS = {}


@bundlecopy_command('build', '''\
Usage:
    bundlecopy build [-hqv]

Writes each input to the output file or directory from your project
file, and then copies the targets. List targets land in the output
directory (or in the output folder, if one is set). Copies happen one at
a time, in the order they're declared. If a source doesn't exist, the
build stops there, and anything already copied stays in place.

Options:
    -h --help       explain these confusing flags
    -q --quiet      don't print anything
    -v --verbose    print every copied file and folder
''')
async def do_build(params):
    await build.build(params.project.inputs, [params.plugin],
                      params.project.output, cwd=params.runtime.project_dir,
                      display=params.runtime.display)


@bundlecopy_command('copy', '''\
Usage:
    bundlecopy copy [-hqv]

Copies the targets, exactly as `bundlecopy build` would, but without
writing the bundle outputs first. Use this when some other tool has
already produced them.

Options:
    -h --help       what is even happening here?
    -q --quiet      don't print anything
    -v --verbose    print every copied file and folder
''')
async def do_copy(params):
    output_dir = _get_output_dir(params.project.output)
    context = params.runtime.get_build_context(output_dir)
    await params.plugin.on_outputs_written(context)


@bundlecopy_command('targets', '''\
Usage:
    bundlecopy targets [-h] [--json]

Lists every target as "source -> destination", in the order they would
be copied, without touching the filesystem.

Options:
    -h --help  I'm not feeling creative :)
    --json     print output as JSON
''')
async def do_targets(params):
    pairs = params.plugin.get_pairs(_get_output_dir(params.project.output))
    if params.args['--json']:
        print(json.dumps([[pair.source, pair.destination] for pair in pairs]))
    else:
        for pair in pairs:
            print('{} -> {}'.format(pair.source, pair.destination))


def _get_output_dir(output):
    # Unlike `build`, copying and listing don't need any output options. With
    # none at all, list targets are copied relative to the project dir.
    if not output.file and not output.dir:
        return None
    return build.get_output_dir(output)


def get_version():
    version_file = os.path.join(compat.MODULE_ROOT, 'VERSION')
    with open(version_file) as f:
        return f.read().strip()


def print_red(*args, **kwargs):
    if compat.is_fancy_terminal():
        sys.stdout.write('\x1b[31m')
    print(*args, **kwargs)
    if compat.is_fancy_terminal():
        sys.stdout.write('\x1b[39m')


def maybe_print_help_and_return(args):
    # `bundlecopy --version`
    if args['--version']:
        print(get_version())
        return 0

    help = args['--help']
    command = args['<command>']
    if command == "help":
        help = True
        help_args = args['<args>']
        command = help_args[0] if help_args else None

    # no explicit command, just print toplevel help
    if command is None:
        print(__doc__, end='')
        return 0

    # bad command, or help for a bad command
    if command not in COMMAND_DOCS:
        print(__doc__, end='', file=sys.stderr)
        return 1

    # help for a specific command that actually exists
    if help:
        print(COMMAND_DOCS[command], end='')
        return 0

    return None


def merged_args_dicts(global_args, subcommand_args):
    '''Args come from both the toplevel parse and the subcommand parse. A
    False flag in the subcommand shouldn't override the same flag given as
    True at the top level.'''
    merged = global_args.copy()
    for key, val in subcommand_args.items():
        if key not in merged:
            merged[key] = val
        elif type(merged[key]) is type(val) is bool:
            merged[key] = merged[key] or val
        else:
            raise RuntimeError("Unmergable args.")
    return merged


def docopt_parse_args(argv):
    args = docopt.docopt(__doc__, argv, help=False, options_first=True)
    command = args['<command>']
    # Skip the subcommand parse for unknown commands and for help requests,
    # which maybe_print_help_and_return deals with.
    if command in COMMAND_DOCS and not args['--help']:
        command_doc = COMMAND_DOCS[command]
        command_argv = [command] + args['<args>']
        command_args = docopt.docopt(command_doc, command_argv, help=False)
        args = merged_args_dicts(args, command_args)
    return args


CommandParams = collections.namedtuple(
    'CommandParams', ['args', 'runtime', 'project', 'plugin'])


# Called as a setup.py entry point, or from __main__.py
# (`python3 -m bundlecopy`).
def main(*, argv=None, env=None, nocatch=False):
    if argv is None:
        argv = sys.argv[1:]
    if env is None:
        env = os.environ.copy()

    args = docopt_parse_args(argv)
    command = args['<command>']

    ret = maybe_print_help_and_return(args)
    if ret is not None:
        return ret

    try:
        runtime = Runtime(args, env)
        project = parser.parse_file(runtime.project_file)
        plugin = CopyPlugin(runtime.apply_flags(project.copy))
        params = CommandParams(args, runtime, project, plugin)
        command_fn = COMMAND_FNS[command]
        run_task(command_fn(params))
    except PrintableError as e:
        if args['--verbose'] or nocatch:
            # Just allow the stacktrace to print if verbose, or in testing.
            raise
        print_red(e.message, end='' if e.message.endswith('\n') else '\n')
        return 1
