import sys

from . import compat

# The display is where everything bundlecopy says to the user goes: the
# verbose copy report from the plugin, and the listing commands in main. The
# QuietDisplay swallows all of it. Errors don't go through here; they're
# raised as a PrintableError and printed by main.
#
# Colors are only used on a fancy terminal. When output is redirected (to a
# file, a pipe, or a StringIO in tests) every line is plain text.

ANSI_GREEN = '\x1b[32m'
ANSI_DEFAULT_COLOR = '\x1b[39m'


class Display:
    def __init__(self, output=None, *, color=None):
        self.output = output or sys.stdout
        if color is None:
            color = compat.is_fancy_terminal(self.output)
        self.color = color

    def print(self, *args, **kwargs):
        print(*args, file=self.output, **kwargs)

    def print_green(self, *args, **kwargs):
        if self.color:
            self.output.write(ANSI_GREEN)
        self.print(*args, **kwargs)
        if self.color:
            self.output.write(ANSI_DEFAULT_COLOR)


class QuietDisplay(Display):
    '''Prints nothing.'''

    def print(self, *args, **kwargs):
        pass

    def print_green(self, *args, **kwargs):
        pass
