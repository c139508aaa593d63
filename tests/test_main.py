from contextlib import redirect_stderr, redirect_stdout
import io
import json
import os
from textwrap import dedent

from bundlecopy import compat
from bundlecopy.error import NotFoundError
import bundlecopy.main
from bundlecopy.runtime import CommandLineError
import shared
from shared import run_bundlecopy_command


class MainTest(shared.BundlecopyTest):
    def setUp(self):
        self.project_dir = shared.create_fixture_project()
        self.write_yaml(dedent('''\
            input: src/index.js
            output:
                file: dist/index.js
            copy:
                targets:
                    - src/assets/asset-1.js
                    - src/assets/scss
            '''))
        # Run from a subdirectory, to make sure relative paths are read from
        # the project dir and not the cwd.
        self.cwd = os.path.join(self.project_dir, 'src', 'assets')

    def write_yaml(self, text):
        shared.write_files(self.project_dir, {'bundlecopy.yaml': text})

    def test_build(self):
        output = run_bundlecopy_command(['build'], self.cwd)
        self.assertEqual('', output)
        expected = {
            'index.js': shared.FIXTURE_FILES['src/index.js'],
            'asset-1.js': shared.FIXTURE_FILES['src/assets/asset-1.js'],
        }
        expected.update(shared.fixture_contents('src/assets/scss', 'scss'))
        shared.assert_contents(os.path.join(self.project_dir, 'dist'),
                               expected)

    def test_build_verbose_flag(self):
        output = run_bundlecopy_command(['build', '-v'], self.cwd)
        self.assertEqual([
            'Copied files and folders:',
            'src/assets/asset-1.js -> ' + os.path.join('dist', 'asset-1.js'),
            'src/assets/scss -> ' + os.path.join('dist', 'scss'),
        ], output.splitlines())

    def test_verbose_in_file_and_quiet_flag(self):
        self.write_yaml(dedent('''\
            input: src/index.js
            output: {file: dist/index.js}
            copy:
                targets: [src/assets/asset-1.js]
                verbose: true
            '''))
        output = run_bundlecopy_command(['build'], self.cwd)
        self.assertEqual(2, len(output.splitlines()))
        output = run_bundlecopy_command(['-q', 'build'], self.cwd)
        self.assertEqual('', output)

    def test_quiet_and_verbose_throw(self):
        with self.assertRaises(CommandLineError):
            run_bundlecopy_command(['-q', '-v', 'build'], self.cwd)

    def test_copy_skips_outputs(self):
        run_bundlecopy_command(['copy'], self.cwd)
        self.assertTrue(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'asset-1.js')))
        self.assertFalse(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'index.js')))

    def test_targets(self):
        output = run_bundlecopy_command(['targets'], self.cwd)
        self.assertEqual([
            'src/assets/asset-1.js -> ' + os.path.join('dist', 'asset-1.js'),
            'src/assets/scss -> ' + os.path.join('dist', 'scss'),
        ], output.splitlines())
        self.assertFalse(os.path.exists(os.path.join(self.project_dir,
                                                     'dist')))

    def test_targets_json(self):
        self.write_yaml(dedent('''\
            copy:
                targets:
                    src/assets/css: build/assets
                output folder: out
            '''))
        output = run_bundlecopy_command(['targets', '--json'], self.cwd)
        self.assertEqual(
            [['src/assets/css', os.path.join('out', 'build', 'assets')]],
            json.loads(output))

    def test_missing_source(self):
        self.write_yaml(dedent('''\
            input: src/index.js
            output: {file: dist/index.js}
            copy:
                targets: [src/assets/asset-1.js, src/assets/asset-3.js]
            '''))
        with self.assertRaises(NotFoundError):
            run_bundlecopy_command(['build'], self.cwd)
        # The first target was copied before the failure, and stays.
        self.assertTrue(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'asset-1.js')))

    def test_errors_print_and_return_one(self):
        self.write_yaml('copy: {targets: [src/assets/asset-3.js]}')
        old_cwd = os.getcwd()
        os.chdir(self.cwd)
        try:
            output = io.StringIO()
            with redirect_stdout(output):
                ret = bundlecopy.main.main(argv=['copy'], env={})
        finally:
            os.chdir(old_cwd)
        self.assertEqual(1, ret)
        self.assertEqual(
            "ENOENT: no such file or directory, stat "
            "'src/assets/asset-3.js'\n", output.getvalue())

    def test_explicit_file(self):
        other_dir = shared.create_dir()
        yaml_path = os.path.join(self.project_dir, 'bundlecopy.yaml')
        run_bundlecopy_command(['--file', yaml_path, 'build'], other_dir)
        self.assertTrue(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'asset-1.js')))

    def test_file_from_env(self):
        other_dir = shared.create_dir()
        yaml_path = os.path.join(self.project_dir, 'bundlecopy.yaml')
        run_bundlecopy_command(['copy'], other_dir,
                               env={'BUNDLECOPY_FILE': yaml_path})
        self.assertTrue(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'asset-1.js')))

    def test_file_basename(self):
        os.rename(os.path.join(self.project_dir, 'bundlecopy.yaml'),
                  os.path.join(self.project_dir, 'assets.yaml'))
        run_bundlecopy_command(['--file-basename', 'assets.yaml', 'copy'],
                               self.cwd)
        self.assertTrue(
            os.path.exists(os.path.join(self.project_dir, 'dist',
                                        'asset-1.js')))

    def test_file_and_file_basename_incompatible(self):
        with self.assertRaises(CommandLineError):
            run_bundlecopy_command(
                ['--file=foo', '--file-basename=bar', 'copy'], self.cwd)

    def test_version(self):
        output = run_bundlecopy_command(['--version'], self.cwd)
        version_file = os.path.join(compat.MODULE_ROOT, 'VERSION')
        with open(version_file) as f:
            self.assertEqual(f.read().strip(), output.strip())

    def test_help(self):
        toplevel = run_bundlecopy_command(['--help'], self.cwd)
        self.assertEqual(bundlecopy.main.__doc__, toplevel)
        self.assertEqual(toplevel, run_bundlecopy_command([], self.cwd))
        for command in ['build', 'copy', 'targets']:
            expected = bundlecopy.main.COMMAND_DOCS[command]
            self.assertEqual(
                expected, run_bundlecopy_command(['help', command], self.cwd))
            self.assertEqual(
                expected, run_bundlecopy_command([command, '-h'], self.cwd))

    def test_bad_command(self):
        with redirect_stderr(io.StringIO()):
            run_bundlecopy_command(['junk'], self.cwd, expected_error=1)

