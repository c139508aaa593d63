from .plugin import copy, CopyPlugin, Configuration, BuildContext
from .targets import CopyPair

__all__ = ['copy', 'CopyPlugin', 'Configuration', 'BuildContext', 'CopyPair']
