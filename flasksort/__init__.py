# -*- coding: utf-8 -*-
"""
Flask colour-sort engine.

The ``core`` package holds the flask model and the pour rules, the ``envs`` package the
explicit-state puzzle session functions and the ``FlaskSort`` controller.
"""

__version__ = "0.1.0"
