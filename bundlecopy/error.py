from contextlib import contextmanager
from textwrap import indent


class PrintableError(Exception):
    def __init__(self, message, *args, **kwargs):
        if args or kwargs:
            message = message.format(*args, **kwargs)
        self.message = message

    def __str__(self):
        return self.message

    def add_context(self, context):
        self.message = 'In {}:\n{}'.format(context, indent(self.message, '  '))


@contextmanager
def error_context(context):
    try:
        yield
    except PrintableError as e:
        e.add_context(context)
        raise


class NotFoundError(PrintableError):
    '''A declared source path is missing. The message matches what the
    underlying stat call reports, so it carries the path exactly as the user
    wrote it.'''

    def __init__(self, path):
        super().__init__("ENOENT: no such file or directory, stat '{}'", path)
        self.path = path


class CopyError(PrintableError):
    pass


class ConfigError(PrintableError):
    pass
