# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

from gibbons.adapters.base import GibbonAdapter
from gibbons.adapters.memory import MemoryGibbonAdapter

__all__ = ["GibbonAdapter", "MemoryGibbonAdapter"]
