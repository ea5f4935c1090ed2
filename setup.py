"""Install the campus hub service package.

This installs the ``campushub`` web application only; deployment files and
the root-level ``tests`` package are not included.
"""

from setuptools import setup, find_packages

setup(
    name='campus-hub',
    version='0.3.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    zip_safe=False,
    python_requires='>=3.8',
    install_requires=[
        'flask',
        'werkzeug',
        'requests',
        'redis',
        'python-dateutil',
        'pytz',
        'jsonschema',
        'icalendar',
        'typing_extensions'
    ],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'campushub-sweep=campushub.scripts.sweep:main'
        ]
    },
    package_data={'campushub': ['schema/*.json']},
    include_package_data=True
)
