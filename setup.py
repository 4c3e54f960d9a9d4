#!/usr/bin/env python
# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

with open('README.md', encoding='utf8') as readme_file:
    readme = readme_file.read()

with open('librato_metrics/VERSION', encoding='utf8') as version_file:
    version = version_file.read().strip()


setup(
    name='librato-metrics',
    version=version,
    description="Submit gauges and counters to the Librato metrics API.",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="librato-metrics contributors",
    packages=find_packages(include=['librato_metrics', 'librato_metrics.*']),
    package_data={'librato_metrics': ['VERSION']},
    include_package_data=True,
    install_requires=[
        'httpx>=0.25',
        'tenacity>=8.2',
    ],
    extras_require={
        'test': [
            'pytest>=7',
        ],
    },
    python_requires=">=3.9",
    license="MIT license",
    zip_safe=False,
    keywords='librato metrics monitoring',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: System :: Monitoring',
    ]
)
