#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Vecteur 2D et backends vectoriels fournis.

Trois representations de points sont enregistrees par defaut :

- ``'double'`` : :class:`Vector2`, composantes float64
- ``'single'`` : :class:`Vector2`, composantes arrondies en float32
- ``'numpy'``  : ``ndarray(2,)`` float64

Usage::

    from model.vector import Vector2, get_backend

    ops = get_backend('single')
    v = ops.normalize(ops.make(3, 4))     # Vector2(0.6, 0.8) en float32

@author: Nervures
@date: 2026-02
"""

import logging
import math

import numpy as np

from .base import (AbstractVectorOps, DEFAULT_NORMALIZE_TOLERANCE,
                   same_component)
from .hashing import combine, hash_double, hash_single

logger = logging.getLogger(__name__)

# Registre des backends : 'nom' -> classe AbstractVectorOps
_BACKEND_REGISTRY = {}


# --------------------------------------------------------------------------
#  Vector2
# --------------------------------------------------------------------------

class Vector2:
    """Vecteur 2D immuable (x, y).

    Egalite exacte composante par composante (NaN egal a NaN), hash
    coherent avec l'egalite.
    """

    __slots__ = ('_x', '_y')

    def __init__(self, x, y):
        object.__setattr__(self, '_x', float(x))
        object.__setattr__(self, '_y', float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Vector2 est immuable")

    def __reduce__(self):
        return (Vector2, (self._x, self._y))

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    def __repr__(self):
        return "Vector2(%r, %r)" % (self._x, self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def __len__(self):
        return 2

    def __getitem__(self, index):
        return (self._x, self._y)[index]

    def __eq__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return (same_component(self._x, other._x)
                and same_component(self._y, other._y))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return combine(hash_double(self._x), hash_double(self._y))

    def __add__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self._x + other._x, self._y + other._y)

    def __sub__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self._x - other._x, self._y - other._y)

    def __neg__(self):
        return Vector2(-self._x, -self._y)

    def __mul__(self, k):
        if isinstance(k, Vector2):
            return NotImplemented
        return Vector2(self._x * k, self._y * k)

    __rmul__ = __mul__

    def __truediv__(self, k):
        return Vector2(self._x / k, self._y / k)

    def dot(self, other):
        return self._x * other.x + self._y * other.y

    def length_squared(self):
        return self._x * self._x + self._y * self._y

    def length(self):
        return math.hypot(self._x, self._y)

    def normalized(self, tolerance=DEFAULT_NORMALIZE_TOLERANCE):
        """Vecteur unitaire, ou vecteur nul si la longueur <= tolerance."""
        length = self.length()
        if length <= tolerance:
            return Vector2(0.0, 0.0)
        return Vector2(self._x / length, self._y / length)


def _as_pair(point):
    """Composantes (x, y) d'un point quelconque.

    :raises ValueError: si le point n'a pas exactement 2 composantes
    """
    if isinstance(point, Vector2):
        return point.x, point.y
    arr = np.asarray(point, dtype=float)
    if arr.shape != (2,):
        raise ValueError(
            "Un point doit avoir 2 composantes, recu shape %s"
            % str(arr.shape))
    return float(arr[0]), float(arr[1])


# --------------------------------------------------------------------------
#  Backends
# --------------------------------------------------------------------------

class DoubleVectorOps(AbstractVectorOps):
    """Points :class:`Vector2` en double precision."""

    name = 'double'

    def make(self, x, y):
        return Vector2(x, y)

    def coerce(self, point):
        if isinstance(point, Vector2):
            return point
        return Vector2(*_as_pair(point))

    def get_x(self, v):
        return v.x

    def get_y(self, v):
        return v.y

    def hash_component(self, value):
        return hash_double(value)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def scale(self, v, k):
        return v * k

    def normalize(self, v):
        return v.normalized(self.normalize_tolerance)


class SingleVectorOps(AbstractVectorOps):
    """Points :class:`Vector2` dont chaque composante est arrondie en
    float32 a la construction.

    Une addition ou un produit de deux float32 est exact en float64 ;
    l'arrondi unique au retour donne donc le resultat simple precision.
    """

    name = 'single'

    def __init__(self, normalize_tolerance=DEFAULT_NORMALIZE_TOLERANCE,
                 equals_epsilon=1.2e-7):
        super().__init__(normalize_tolerance, equals_epsilon)

    def scalar(self, value):
        return float(np.float32(value))

    def component_text(self, value):
        return str(np.float32(value))

    def make(self, x, y):
        return Vector2(np.float32(x), np.float32(y))

    def coerce(self, point):
        return self.make(*_as_pair(point))

    def get_x(self, v):
        return v.x

    def get_y(self, v):
        return v.y

    def hash_component(self, value):
        return hash_single(value)


class NumpyVectorOps(AbstractVectorOps):
    """Points ``ndarray(2,)`` float64.

    Les points sont copies a la conversion : une courbe ne partage
    jamais un tableau avec l'appelant.
    """

    name = 'numpy'

    def make(self, x, y):
        return np.array([x, y], dtype=float)

    def coerce(self, point):
        return np.array(_as_pair(point), dtype=float)

    def get_x(self, v):
        return float(v[0])

    def get_y(self, v):
        return float(v[1])

    def hash_component(self, value):
        return hash_double(value)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def scale(self, v, k):
        return v * k


# --------------------------------------------------------------------------
#  Registre
# --------------------------------------------------------------------------

def register_backend(name, ops_cls):
    """Enregistre un backend vectoriel.

    :param name: nom du backend (ex: 'double')
    :type name: str
    :param ops_cls: classe derivee de AbstractVectorOps
    """
    if not (isinstance(ops_cls, type)
            and issubclass(ops_cls, AbstractVectorOps)):
        raise TypeError(
            "%r n'est pas une classe AbstractVectorOps" % (ops_cls,))
    _BACKEND_REGISTRY[name] = ops_cls
    logger.debug("Backend vectoriel enregistre : %s -> %s",
                 name, ops_cls.__name__)


def _ensure_builtin_registered():
    """Enregistre les backends fournis si ce n'est pas deja fait."""
    for ops_cls in (DoubleVectorOps, SingleVectorOps, NumpyVectorOps):
        if ops_cls.name not in _BACKEND_REGISTRY:
            register_backend(ops_cls.name, ops_cls)


def available_backends():
    """Noms des backends enregistres, tries.

    :rtype: list[str]
    """
    _ensure_builtin_registered()
    return sorted(_BACKEND_REGISTRY.keys())


def get_backend(name, **kwargs):
    """Instancie un backend enregistre.

    :param name: nom du backend ('double', 'single', 'numpy'...)
    :type name: str
    :param kwargs: parametres du constructeur (normalize_tolerance,
        equals_epsilon)
    :returns: backend
    :rtype: AbstractVectorOps
    :raises ValueError: si le nom est inconnu
    """
    _ensure_builtin_registered()
    if name not in _BACKEND_REGISTRY:
        raise ValueError(
            "Backend '%s' inconnu. Disponibles : %s"
            % (name, ', '.join(available_backends())))
    return _BACKEND_REGISTRY[name](**kwargs)
