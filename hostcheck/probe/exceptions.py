# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Exceptions raised while collecting detected values from a runtime."""


class ProbeError(Exception):
    """The runtime could not be queried, or answered with something unusable."""


class SnapshotLoadError(ProbeError):
    """A snapshot file is missing, unreadable, or doesn't match the snapshot schema."""
