# -*- coding: utf-8 -*-
"""
2048 grid engine.

The ``core`` package holds the pure numpy board functions, the ``envs`` package the explicit-state
session functions and the ``TwentyFortyEight`` controller.
"""

__version__ = "0.1.0"
