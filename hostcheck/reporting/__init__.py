# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Report output.

  - console: styled lines for the terminal and the plain-text email body
  - writer: JSON report file
"""
