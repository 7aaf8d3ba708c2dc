#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Hachage incremental de Jenkins (variante "one-at-a-time").

Utilise par les types valeur (CubicBezier, Vector2...) pour combiner les
hashs de leurs composantes dans un ordre fixe. Toute l'arithmetique est
faite sur des entiers signes 32 bits, avec debordement silencieux : les
valeurs sont identiques d'une plateforme a l'autre.

Usage::

    h = JenkinsHash()
    h.mix(hash_double(1.0)).mix(hash_double(2.0))
    value = h.finalize()

    # ou directement
    value = combine(hash_double(1.0), hash_double(2.0))

@author: Nervures
@date: 2026-02
"""

import numpy as np

_SEED = 0x7E53A269
_MULTIPLIER = -0x5AAAAAD7

# Bits IEEE 754 de +inf : masque applique a NaN et aux zeros signes
_DOUBLE_INF_BITS = 0x7FF0000000000000
_SINGLE_INF_BITS = 0x7F800000


def _int32(value):
    """Ramene un entier Python sur 32 bits signes (debordement silencieux)."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class JenkinsHash:
    """Accumulateur de hash de Jenkins.

    L'etat demarre a 0. Chaque appel a :meth:`mix` replie une nouvelle
    valeur dans l'etat ; :meth:`finalize` applique la passe finale
    sans modifier l'etat.
    """

    __slots__ = ('_current',)

    def __init__(self):
        self._current = 0

    @property
    def state(self):
        """Etat courant (avant finalisation), entier signe 32 bits."""
        return self._current

    def mix(self, value):
        """Replie une valeur dans l'etat.

        :param value: hash d'une composante (entier, tronque a 32 bits)
        :type value: int
        :returns: self (pour chainage)
        :rtype: JenkinsHash
        """
        num = self._current
        if num == 0:
            num = _SEED
        else:
            num = _int32(num * _MULTIPLIER)
        num = _int32(num + _int32(value))
        num = _int32(num + (num << 10))
        # decalage arithmetique : num est signe
        num = _int32(num ^ (num >> 6))
        self._current = num
        return self

    def finalize(self):
        """Passe finale de melange.

        :returns: hash final, entier signe 32 bits
        :rtype: int
        """
        num = self._current
        num = _int32(num + (num << 3))
        num = _int32(num ^ (num >> 11))
        num = _int32(num + (num << 15))
        return num


def combine(*values):
    """Hash de Jenkins d'une suite de valeurs, dans l'ordre donne.

    :param values: hashs entiers a combiner
    :returns: hash final
    :rtype: int
    """
    h = JenkinsHash()
    for value in values:
        h.mix(value)
    return h.finalize()


def hash_double(value):
    """Hash d'un flottant double precision (convention .NET).

    Les 64 bits IEEE sont replies en ``bas32 ^ haut32``. Les zeros signes
    et tous les NaN sont canonises avant, pour que deux valeurs egales
    au sens de Vector2 aient le meme hash.

    :param value: flottant
    :type value: float
    :rtype: int
    """
    bits = int(np.array(value, dtype=np.float64).view(np.int64))
    if value != value or value == 0:
        bits &= _DOUBLE_INF_BITS
    return _int32(bits) ^ _int32(bits >> 32)


def hash_single(value):
    """Hash d'un flottant simple precision : ses 32 bits IEEE.

    :param value: flottant (arrondi en float32)
    :type value: float
    :rtype: int
    """
    single = np.float32(value)
    bits = int(np.array(single, dtype=np.float32).view(np.int32))
    if single != single or single == 0:
        bits &= _SINGLE_INF_BITS
    return _int32(bits)
