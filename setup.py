#!/usr/bin/env python
from setuptools import setup, find_packages

with open('./requirements.txt') as f:
    requirements = f.read().splitlines()
install_requires = requirements

setup(
    name='multitarget-learn',
    version='0.1.0',
    description="Problem transformation methods (binary relevance, "
                "classifier chains, bagging) for multi-label and "
                "multi-target classification",
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    test_suite='mtlearn',
    python_requires='>=3.7',
    packages=find_packages(include=['mtlearn', 'mtlearn.*']),
)
