#! /usr/bin/env python3

import os
import sys
import subprocess

REPO_ROOT = os.path.dirname(os.path.realpath(__file__))
TESTS_DIR = os.path.join(REPO_ROOT, 'tests')


def main():
    # Unset any BUNDLECOPY environment variables to make sure test runs don't
    # get thrown off by anything in your bashrc.
    for var in list(os.environ):
        if var.startswith('BUNDLECOPY_'):
            del os.environ[var]

    # Turn debugging features on for the asyncio library.
    os.environ['PYTHONASYNCIODEBUG'] = '1'

    # Run the actual tests.
    env = os.environ.copy()
    env['PYTHONPATH'] = REPO_ROOT
    args = sys.argv[1:]
    if len(args) > 0 and args[0] == '--with-coverage':
        args.pop(0)
        command_start = ['coverage', 'run']
    else:
        command_start = [sys.executable]
    command = command_start + ['-m', 'unittest'] + args
    try:
        subprocess.check_call(command, env=env, cwd=TESTS_DIR)
    except subprocess.CalledProcessError:
        sys.exit(1)

    # Run the linter.
    try:
        subprocess.check_call(['flake8', 'bundlecopy', 'tests'], cwd=REPO_ROOT)
    except subprocess.CalledProcessError:
        sys.exit(1)


if __name__ == '__main__':
    main()
