#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Package cubiccurves : courbes de Bezier cubiques 2D.

Evaluation (position, derivee, tangente), egalite structurelle et hash
reproductible, sur une representation de points interchangeable.

Usage::

    from cubiccurves import CubicBezier

    b = CubicBezier((0, 0), (1, 2), (3, 2), (4, 0))
    b.sample(0.5)
    print(b)

@author: Nervures
@date: 2026-02
"""

from .cubic_bezier import CubicBezier
from .vector import (Vector2, DoubleVectorOps, SingleVectorOps,
                     NumpyVectorOps, register_backend, get_backend,
                     available_backends)
from .base import AbstractVectorOps
from .hashing import JenkinsHash, combine, hash_double, hash_single
from .curveconfig import (load_config, load_defaults, merge_params,
                          validate_params, get_default_backend,
                          set_default_backend)
