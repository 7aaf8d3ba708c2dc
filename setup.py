#!/usr/bin/python
#-*-coding: utf-8 -*-

from setuptools import setup

setup(
    name='cubiccurves',
    version='0.1.0',
    description='Cubic Bezier curves in 2D - evaluation, tangents, value equality and hashing',
    author='Nervures',
    author_email='be@nervures.com',
    license='LGPL-3.0',
    package_dir={
        'cubiccurves': 'sources/model',
    },
    packages=['cubiccurves'],
    package_data={
        'cubiccurves': ['*.cfg'],
    },
    install_requires=[
        'numpy>=1.20',
        'matplotlib>=3.5',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
    python_requires='>=3.8',
)
