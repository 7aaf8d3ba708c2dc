#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Classe abstraite des operations vectorielles 2D consommees par les courbes.

Architecture extensible : chaque representation de point (Vector2 double
precision, Vector2 simple precision, ndarray numpy...) implemente
AbstractVectorOps. Une courbe ne manipule jamais ses points directement,
elle passe toujours par son backend.

@author: Nervures
@date: 2026-02
"""

import math
from abc import ABC, abstractmethod

DEFAULT_NORMALIZE_TOLERANCE = 0.0
DEFAULT_EQUALS_EPSILON = 1.2e-12


def same_component(a, b):
    """Egalite exacte de deux composantes, NaN egal a NaN.

    Reproduit la semantique ``Equals`` des flottants : la comparaison reste
    reflexive meme pour NaN, et ``+0.0`` est egal a ``-0.0``.
    """
    return a == b or (a != a and b != b)


class AbstractVectorOps(ABC):
    """Operations sur des points 2D d'une representation donnee.

    Responsabilites :
    - Construire et convertir les points (make, coerce)
    - Extraire les composantes (get_x, get_y)
    - Fournir l'arithmetique consommee par les courbes
      (add, sub, scale, normalize)
    - Definir l'egalite et le hash des composantes
    """

    #: nom sous lequel le backend est enregistre
    name = None

    def __init__(self, normalize_tolerance=DEFAULT_NORMALIZE_TOLERANCE,
                 equals_epsilon=DEFAULT_EQUALS_EPSILON):
        """
        :param normalize_tolerance: longueur (incluse) en dessous de
            laquelle normalize() retourne le vecteur nul ; 0.0 : seul le
            vecteur de longueur nulle est concerne
        :type normalize_tolerance: float
        :param equals_epsilon: seuil (distance au carre) de equals_or_close
        :type equals_epsilon: float
        """
        self.normalize_tolerance = float(normalize_tolerance)
        self.equals_epsilon = float(equals_epsilon)

    def __repr__(self):
        return "%s(normalize_tolerance=%g, equals_epsilon=%g)" % (
            type(self).__name__, self.normalize_tolerance,
            self.equals_epsilon)

    # ------------------------------------------------------------------
    #  Primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def make(self, x, y):
        """Construit un point de ce backend.

        :param x: abscisse
        :param y: ordonnee
        :returns: point
        """
        pass

    @abstractmethod
    def coerce(self, point):
        """Convertit un point quelconque (Vector2, tuple, ndarray...)
        en point de ce backend.

        :raises ValueError: si le point n'a pas exactement 2 composantes
        """
        pass

    @abstractmethod
    def get_x(self, v):
        """Abscisse du point."""
        pass

    @abstractmethod
    def get_y(self, v):
        """Ordonnee du point."""
        pass

    @abstractmethod
    def hash_component(self, value):
        """Hash entier 32 bits d'une composante.

        Doit etre coherent avec :meth:`equals` : deux composantes egales
        ont le meme hash.
        """
        pass

    def scalar(self, value):
        """Convertit un scalaire dans la precision du backend."""
        return float(value)

    def component_text(self, value):
        """Ecriture decimale la plus courte d'une composante."""
        return repr(float(value))

    # ------------------------------------------------------------------
    #  Arithmetique (surchargeable pour la performance)
    # ------------------------------------------------------------------

    def add(self, a, b):
        return self.make(self.get_x(a) + self.get_x(b),
                         self.get_y(a) + self.get_y(b))

    def sub(self, a, b):
        return self.make(self.get_x(a) - self.get_x(b),
                         self.get_y(a) - self.get_y(b))

    def scale(self, v, k):
        return self.make(self.get_x(v) * k, self.get_y(v) * k)

    def is_degenerate(self, v):
        """Vrai si normalize(v) retourne le vecteur nul.

        :rtype: bool
        """
        return self.length(v) <= self.normalize_tolerance

    def normalize(self, v):
        """Vecteur unitaire de meme direction.

        Si la longueur ne depasse pas ``normalize_tolerance`` (par defaut :
        longueur nulle), retourne le vecteur nul (pas d'exception).
        NaN se propage.
        """
        if self.is_degenerate(v):
            return self.make(0.0, 0.0)
        length = self.length(v)
        return self.make(self.get_x(v) / length, self.get_y(v) / length)

    def equals(self, a, b):
        """Egalite exacte composante par composante."""
        return (same_component(self.get_x(a), self.get_x(b))
                and same_component(self.get_y(a), self.get_y(b)))

    # ------------------------------------------------------------------
    #  Utilitaires derives des primitives
    # ------------------------------------------------------------------

    def dot(self, a, b):
        return self.get_x(a) * self.get_x(b) + self.get_y(a) * self.get_y(b)

    def length_squared(self, v):
        return self.dot(v, v)

    def length(self, v):
        return math.hypot(self.get_x(v), self.get_y(v))

    def distance_squared(self, a, b):
        return self.length_squared(self.sub(a, b))

    def distance(self, a, b):
        return self.length(self.sub(a, b))

    def lerp(self, a, b, t):
        """Interpolation lineaire ``a + (b - a) * t``."""
        return self.add(a, self.scale(self.sub(b, a), t))

    def equals_or_close(self, a, b, epsilon=None):
        """Egalite a une tolerance pres (distance au carre < epsilon).

        :param epsilon: seuil, ``equals_epsilon`` du backend si None
        :type epsilon: float or None
        :rtype: bool
        """
        if epsilon is None:
            epsilon = self.equals_epsilon
        return self.distance_squared(a, b) < epsilon
