# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
hostcheck: pre-deployment validation of a host's runtime configuration.

Reads the interpreter version, loaded extensions and ini directives of the
target runtime, compares them against a declared baseline and reports a
pass/fail verdict per requirement.
"""

__version__ = "0.1.0"
