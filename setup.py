import os
import setuptools

# Written according to the docs at
# https://packaging.python.org/en/latest/distributing.html

project_root = os.path.dirname(__file__)
readme_file = os.path.join(project_root, 'README.md')
module_root = os.path.join(project_root, 'bundlecopy')
version_file = os.path.join(module_root, 'VERSION')


def get_version():
    with open(version_file) as f:
        return f.read().strip()


def get_install_requires():
    return ['docopt', 'PyYAML']


def readme_text():
    with open(readme_file) as f:
        return f.read().strip()


setuptools.setup(
    name='bundlecopy',
    description='Copy files and folders into your bundle output',
    version=get_version(),
    license='MIT',
    packages=['bundlecopy'],
    package_data={'bundlecopy': ['VERSION']},
    entry_points={'console_scripts': [
        'bundlecopy=bundlecopy.main:main',
    ]},
    install_requires=get_install_requires(),
    extras_require={'test': ['flake8']},
    python_requires='>=3.7',
    long_description=readme_text(),
    long_description_content_type='text/markdown',
)
