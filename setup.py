#!/usr/bin/env python3

# See the accompanying README file.

from __future__ import annotations

import re
import sys
import pathlib

from setuptools import setup, Command


def read_whole_file(name, mode):
    assert mode == "rt"
    f = open(name, mode, encoding="utf8")
    try:
        return f.read()
    finally:
        f.close()


def get_version() -> str:
    # single source of truth is the package
    mo = re.search(r'^__version__ = "(?P<version>[^"]+)"', read_whole_file("unisegment/__init__.py", "rt"), re.MULTILINE)
    assert mo, "unable to find __version__"
    return mo.group("version")


class run_tests(Command):
    description = "Run test suite"

    # 'verbose' is builtin and defaults to 1 (--quiet is also builtin
    # and forces verbose to 0)
    user_options = [
        ("show-tests", "v", "Show each test being run"),
        ("locals", None, "Show local variables in test failure"),
    ]

    boolean_options = ["show-tests", "locals"]

    def initialize_options(self):
        self.show_tests = 0
        self.locals = False

    def finalize_options(self):
        pass

    def run(self):
        import unittest
        import unisegment.tests

        suite = unittest.TestLoader().loadTestsFromModule(unisegment.tests)
        # verbosity of zero doesn't print anything, one prints a dot
        # per test and two prints each test name
        result = unittest.TextTestRunner(verbosity=self.show_tests + 1, tb_locals=self.locals).run(suite)
        if not result.wasSuccessful():
            sys.exit(1)


if __name__ == "__main__":
    setup(
        name="unisegment",
        version=get_version(),
        python_requires=">=3.9",
        description="Unicode grapheme cluster and word segmentation over UTF-16 code units",
        long_description=pathlib.Path("README.rst").read_text(encoding="utf8"),
        long_description_content_type="text/x-rst",
        classifiers=[
            "Development Status :: 5 - Production/Stable",
            "Intended Audience :: Developers",
            "Programming Language :: Python :: 3",
            "Topic :: Text Processing :: General",
        ],
        keywords=["unicode", "segmentation", "grapheme", "word break", "tr29"],
        platforms="any",
        packages=["unisegment"],
        cmdclass={
            "test": run_tests,
        },
    )
