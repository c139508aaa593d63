from collections import namedtuple

import yaml

from .build import OutputOptions
from .error import ConfigError, PrintableError, error_context
from .plugin import make_configuration

DEFAULT_PROJECT_FILE_NAME = 'bundlecopy.yaml'

Project = namedtuple('Project', ['inputs', 'output', 'copy'])


class ParserError(PrintableError):
    pass


def parse_file(file_path):
    with open(file_path) as f:
        text = f.read()
    with error_context(file_path):
        return parse_string(text)


def parse_string(yaml_str):
    try:
        blob = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ParserError("YAML parser error:\n\n" + str(e)) from e
    if blob is None:
        blob = {}
    return _parse_toplevel(blob)


def _parse_toplevel(blob):
    inputs = _extract_inputs(blob)
    output = _extract_output(blob)
    copy = _extract_copy(blob)
    if blob:
        raise ParserError("Unknown toplevel fields: " +
                          ", ".join(str(key) for key in blob.keys()))
    return Project(inputs, output, copy)


def _extract_inputs(blob):
    inputs = _optional_list(typesafe_pop(blob, 'input', []))
    if inputs is None or not all(isinstance(i, str) for i in inputs):
        raise ParserError('"input" field must be a string or a list of '
                          'strings.')
    return inputs


def _extract_output(blob):
    output_blob = typesafe_pop(blob, 'output', None) or {}
    file = _optional_string(output_blob, 'file')
    dir = _optional_string(output_blob, 'dir')
    if output_blob:
        raise ParserError("Unknown output fields: " +
                          ", ".join(str(key) for key in output_blob.keys()))
    return OutputOptions(file, dir)


def _extract_copy(blob):
    copy_blob = typesafe_pop(blob, 'copy', None) or {}
    targets = typesafe_pop(copy_blob, 'targets', None)
    output_folder = _optional_string(copy_blob, 'output folder')
    verbose = typesafe_pop(copy_blob, 'verbose', False)
    if copy_blob:
        raise ParserError("Unknown copy fields: " +
                          ", ".join(str(key) for key in copy_blob.keys()))
    # YAML happily produces numbers and booleans where the user meant paths.
    # Catch that here rather than letting it turn into a confusing filename.
    if isinstance(targets, list):
        _check_strings(targets, '"targets" entries must be strings.')
    elif isinstance(targets, dict):
        _check_strings(targets.keys(), '"targets" sources must be strings.')
        _check_strings(targets.values(),
                       '"targets" destinations must be strings.')
    try:
        return make_configuration(targets, output_folder, verbose)
    except ConfigError as e:
        raise ParserError(e.message) from e


def _check_strings(values, message):
    if not all(isinstance(v, str) for v in values):
        raise ParserError(message)


def _optional_string(blob, name):
    value = typesafe_pop(blob, name, None)
    if value is not None and not isinstance(value, str):
        raise ParserError('"{}" field must be a string.'.format(name))
    return value


def _optional_list(value):
    '''Convert a value that may be a scalar (str) or list into a tuple, so
    that a single input and a list of inputs look the same to callers.'''
    if isinstance(value, str):
        return (value, )
    elif isinstance(value, list):
        return tuple(value)

    return None  # Let callers raise errors.


def typesafe_pop(d, field, default=object()):
    if not isinstance(d, dict):
        raise ParserError(
            'Error parsing project file: {} is not a map.'.format(repr(d)))
    if default == typesafe_pop.__defaults__[0]:
        return d.pop(field)
    else:
        return d.pop(field, default)
