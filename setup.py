#!/usr/bin/python3

import os
import sys

from setuptools import setup

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from version import version


setup(
    name = 'motec-ld-export',
    version = version,
    description = 'Decoder for MoTeC .ld telemetry logs and their .ldx lap sidecars',
    license = 'MIT',
    python_requires = '>=3.9',
    packages = ['motec'],
    py_modules = ['ldexport', 'version'],
    install_requires = [
        'numpy',
        'dacite',
    ],
    extras_require = {
        'test': ['pytest'],
    },
    entry_points = {
        'console_scripts': ['ldexport = ldexport:main'],
    },
)
