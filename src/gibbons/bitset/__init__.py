# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

from gibbons.bitset.gibbon import Gibbon
from gibbons.bitset.processor import BitLocation, locate

__all__ = ["Gibbon", "BitLocation", "locate"]
