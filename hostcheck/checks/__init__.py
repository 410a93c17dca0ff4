# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Turns a baseline and a runtime snapshot into a CheckReport."""
