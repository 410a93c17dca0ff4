# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Requirement model and the comparison rules applied to each requirement.

Subsystems:
  - models: requirement and result types
  - classification: which settings are byte sizes, which are flags
  - comparator: the pass/fail decision for a single setting
  - versions: runtime version ordering
"""
