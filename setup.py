#!/usr/bin/env python3

"""lroa generates route origin authorization tables from the route and
route6 objects of a DN42 style registry. It validates prefixes, origins and
maximum lengths, merges duplicate and conflicting authorizations and writes
rpki-client compatible JSON or BIRD ROA tables."""

import setuptools

setuptools.setup(
    name="lroa",
    version="1.0",
    packages=[
        "lroa",
        "lroa.tools",
    ],
    license="http://opensource.org/licenses/MIT",
    description="Generates ROA tables from IRR route objects",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.7",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration"
    ],
    long_description=__doc__,
    python_requires=">=3.7",
    install_requires=[
        "netaddr",
        "python-dateutil"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    entry_points={
        "console_scripts": [
            "roagen = lroa.tools.roagen:main"
        ]
    },
)
