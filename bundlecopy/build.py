from collections import namedtuple
import os
import shutil

from .async_helpers import run_in_thread
from . import compat
from .error import PrintableError
from .plugin import BuildContext

# Where the bundle gets written. Exactly one of the two is set: `file` for a
# single output file, or `dir` for a directory that can hold several chunks.
OutputOptions = namedtuple('OutputOptions', ['file', 'dir'])


async def build(inputs, plugins, output, *, cwd, display):
    '''A minimal bundler lifecycle: write the outputs, then tell every plugin
    that the outputs are on disk. Plugins run one after another, in the order
    they were given, and the build fails with the first plugin that fails.'''
    check_output_options(inputs, output)
    for source, dest in get_output_files(inputs, output):
        await run_in_thread(_write_output, os.path.join(cwd, source),
                            os.path.join(cwd, dest), source)
    context = BuildContext(
        cwd=cwd, output_dir=get_output_dir(output), display=display)
    for plugin in plugins:
        hook = getattr(plugin, 'on_outputs_written', None)
        if hook is not None:
            await hook(context)


def check_output_options(inputs, output):
    if bool(output.file) == bool(output.dir):
        raise BuildError('Exactly one of the output "file" or "dir" options '
                         'must be set.')
    if not inputs:
        raise BuildError('At least one input is required.')
    if output.file and len(inputs) > 1:
        raise BuildError('When building multiple chunks, the output "dir" '
                         'option must be used, not "file".')


def get_output_dir(output):
    '''All chunks share one output directory. For a single output file,
    that's the directory the file is in.'''
    if output.dir:
        return output.dir
    return os.path.dirname(output.file)


def get_output_files(inputs, output):
    if output.file:
        return [(inputs[0], output.file)]
    return [(source, os.path.join(output.dir, os.path.basename(source)))
            for source in inputs]


def _write_output(source, dest, display_name):
    if not os.path.isfile(source):
        raise BuildError('Input file "{}" doesn\'t exist.', display_name)
    compat.makedirs(os.path.dirname(dest))
    shutil.copyfile(source, dest)


class BuildError(PrintableError):
    pass
