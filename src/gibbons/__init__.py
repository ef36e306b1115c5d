# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

from gibbons.adapters import GibbonAdapter, MemoryGibbonAdapter
from gibbons.bitset import Gibbon
from gibbons.configs import GibbonsConfig
from gibbons.gibbons import Gibbons

__version__ = "0.1.0"

__all__ = ["Gibbon", "GibbonAdapter", "Gibbons", "GibbonsConfig", "MemoryGibbonAdapter"]
