# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Detected-value providers.

A probe turns a runtime into a RuntimeSnapshot: version, loaded extensions
and the current value of every setting the baseline mentions. The checks
runner only ever sees the snapshot, never the runtime itself.

  - php: queries a live PHP CLI binary
  - snapshot: reads a previously captured snapshot file
"""
