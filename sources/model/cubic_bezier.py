#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Courbe de Bezier cubique 2D (4 points de controle).

Evaluation par la forme de Bernstein, en O(1) pour tout t reel : les
valeurs hors de [0, 1] sont extrapolees par le meme polynome.
La courbe est une valeur immuable : egalite et hash portent sur les
quatre points de controle.

Creation::

    b = CubicBezier((0, 0), (1, 2), (3, 2), (4, 0))

    # Evaluation
    pt = b.sample(0.5)            # Vector2
    dp = b.derivative(0.5)        # B'(0.5)
    tg = b.tangent(0.5)           # vecteur unitaire
    pts = b.evaluate([0, .5, 1])  # ndarray(3, 2)

    # Autre representation des points
    b32 = CubicBezier((0, 0), (1, 2), (3, 2), (4, 0), backend='single')

@author: Nervures
@date: 2026-02
"""

import logging
from decimal import Context, Decimal, ROUND_HALF_UP

import numpy as np

from .base import same_component
from .curveconfig import plot_samples, resolve_backend
from .hashing import JenkinsHash

logger = logging.getLogger(__name__)

_THOUSANDTH = Decimal('0.001')
# assez de chiffres pour quantifier n'importe quel double a 1e-3
_FORMAT_CONTEXT = Context(prec=400)


def _format_n3(text):
    """Formate une composante avec 3 decimales, separateur de milliers ','.

    L'arrondi (demi au-dessus) se fait sur l'ecriture decimale la plus
    courte de la valeur : 1.2345 donne 1.235.

    :param text: representation decimale de la composante
    :type text: str
    :rtype: str
    """
    d = Decimal(text)
    if d.is_nan():
        return 'NaN'
    if d.is_infinite():
        return '-Infinity' if d.is_signed() else 'Infinity'
    d = d.quantize(_THOUSANDTH, rounding=ROUND_HALF_UP,
                   context=_FORMAT_CONTEXT)
    return format(d, ',.3f')


class CubicBezier:
    """Courbe de Bezier cubique 2D.

    p0 = depart, p3 = arrivee, p1 et p2 = poignees de controle.
    Aucune contrainte sur les points : points confondus, alignes ou
    courbe de longueur nulle sont valides.
    """

    __slots__ = ('_p0', '_p1', '_p2', '_p3', '_backend')

    def __init__(self, p0, p1, p2, p3, backend=None):
        """
        :param p0: point de depart
        :param p1: premiere poignee
        :param p2: seconde poignee
        :param p3: point d'arrivee
        :type p0, p1, p2, p3: Vector2, tuple, list ou ndarray(2,)
        :param backend: representation des points : instance
            AbstractVectorOps, nom enregistre ('double', 'single',
            'numpy') ou None pour le backend par defaut
        """
        ops = resolve_backend(backend)
        setattr_ = object.__setattr__
        setattr_(self, '_backend', ops)
        setattr_(self, '_p0', ops.coerce(p0))
        setattr_(self, '_p1', ops.coerce(p1))
        setattr_(self, '_p2', ops.coerce(p2))
        setattr_(self, '_p3', ops.coerce(p3))

    def __setattr__(self, name, value):
        raise AttributeError("CubicBezier est immuable")

    def __reduce__(self):
        return (CubicBezier, (self._p0, self._p1, self._p2, self._p3,
                              self._backend))

    # ------------------------------------------------------------------
    #  Properties
    # ------------------------------------------------------------------

    @property
    def p0(self):
        """Point de depart."""
        return self._p0

    @property
    def p1(self):
        """Premiere poignee."""
        return self._p1

    @property
    def p2(self):
        """Seconde poignee."""
        return self._p2

    @property
    def p3(self):
        """Point d'arrivee."""
        return self._p3

    @property
    def control_points(self):
        """Les 4 points de controle (p0, p1, p2, p3)."""
        return (self._p0, self._p1, self._p2, self._p3)

    @property
    def backend(self):
        """Backend vectoriel des points (AbstractVectorOps)."""
        return self._backend

    def _components(self):
        ops = self._backend
        result = []
        for p in self.control_points:
            result.append(ops.get_x(p))
            result.append(ops.get_y(p))
        return tuple(result)

    def as_array(self):
        """Points de controle, ndarray(4, 2) float64 (copie)."""
        return np.array(self._components(), dtype=float).reshape(4, 2)

    # ------------------------------------------------------------------
    #  Evaluation
    # ------------------------------------------------------------------

    def bernstein(self, t):
        """Poids de Bernstein (b0, b1, b2, b3) en t. Leur somme vaut 1.

        :param t: parametre (tout reel)
        :type t: float
        :rtype: tuple(float, float, float, float)
        """
        s = self._backend.scalar
        ti = 1.0 - t
        return (s(ti * ti * ti),
                s(3.0 * ti * ti * t),
                s(3.0 * ti * t * t),
                s(t * t * t))

    def sample(self, t):
        """Point de la courbe en t.

        B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3

        :param t: parametre, normalement dans [0, 1] ; les autres valeurs
            sont extrapolees, sans erreur
        :type t: float
        :returns: point dans la representation du backend
        """
        ops = self._backend
        t0, t1, t2, t3 = self.bernstein(t)
        result = ops.add(ops.scale(self._p0, t0), ops.scale(self._p1, t1))
        result = ops.add(result, ops.scale(self._p2, t2))
        return ops.add(result, ops.scale(self._p3, t3))

    def derivative(self, t):
        """Derivee premiere en t.

        B'(t) = 3(1-t)^2 (P1-P0) + 6(1-t)t (P2-P1) + 3t^2 (P3-P2)

        Sa norme est la vitesse de parcours en t. Le vecteur nul est un
        resultat normal (courbe degeneree, point de rebroussement).

        :param t: parametre (tout reel)
        :type t: float
        """
        ops = self._backend
        s = ops.scalar
        ti = 1.0 - t
        tp0 = s(3.0 * ti * ti)
        tp1 = s(6.0 * t * ti)
        tp2 = s(3.0 * t * t)
        result = ops.add(ops.scale(ops.sub(self._p1, self._p0), tp0),
                         ops.scale(ops.sub(self._p2, self._p1), tp1))
        return ops.add(result, ops.scale(ops.sub(self._p3, self._p2), tp2))

    def second_derivative(self, t):
        """Derivee seconde en t.

        B''(t) = 6(1-t) (P2 - 2P1 + P0) + 6t (P3 - 2P2 + P1)
        """
        ops = self._backend
        s = ops.scalar
        d0 = ops.sub(self._p1, self._p0)
        d1 = ops.sub(self._p2, self._p1)
        d2 = ops.sub(self._p3, self._p2)
        return ops.add(ops.scale(ops.sub(d1, d0), s(6.0 * (1.0 - t))),
                       ops.scale(ops.sub(d2, d1), s(6.0 * t)))

    def tangent(self, t):
        """Direction de parcours en t : derivee normalisee.

        Si la derivee est degeneree (longueur nulle, ou sous la tolerance
        du backend), le resultat est celui de ``normalize`` du backend
        (vecteur nul pour les backends fournis), retourne tel quel.
        """
        ops = self._backend
        d = self.derivative(t)
        if ops.is_degenerate(d):
            logger.debug("Tangente sur une derivee degeneree (t=%r) : %s",
                         t, self)
        return ops.normalize(d)

    def normal(self, t):
        """Normale unitaire en t (rotation +90 deg de la tangente)."""
        ops = self._backend
        tg = self.tangent(t)
        return ops.make(-ops.get_y(tg), ops.get_x(tg))

    def curvature(self, t):
        """Courbure signee en t.

        kappa = (x' * y'' - y' * x'') / (x'^2 + y'^2)^(3/2)

        :returns: courbure, 0.0 si la derivee est (quasi) nulle
        :rtype: float
        """
        ops = self._backend
        d1 = self.derivative(t)
        d2 = self.second_derivative(t)
        cross = ops.get_x(d1) * ops.get_y(d2) - ops.get_y(d1) * ops.get_x(d2)
        denom = ops.length_squared(d1) ** 1.5
        if denom < 1e-30:
            return 0.0
        return float(cross / denom)

    # ------------------------------------------------------------------
    #  Evaluation vectorisee (numpy, double precision)
    # ------------------------------------------------------------------

    @staticmethod
    def _bernstein_matrix(t):
        """Matrice de Bernstein cubique, ndarray(m, 4)."""
        ti = 1.0 - t
        return np.column_stack([ti**3, 3.0 * ti**2 * t,
                                3.0 * ti * t**2, t**3])

    def evaluate(self, t):
        """Evalue la courbe en un ou plusieurs parametres.

        :param t: parametre(s), scalaire ou array
        :type t: float or array-like
        :returns: ndarray(2,) si t scalaire, ndarray(m, 2) sinon
        :rtype: numpy.ndarray
        """
        t = np.asarray(t, dtype=float)
        result = self._bernstein_matrix(np.atleast_1d(t)) @ self.as_array()
        if t.ndim == 0:
            return result[0]
        return result

    def evaluate_derivative(self, t):
        """Derivee premiere en un ou plusieurs parametres.

        :param t: parametre(s), scalaire ou array
        :returns: ndarray(2,) si t scalaire, ndarray(m, 2) sinon
        :rtype: numpy.ndarray
        """
        t = np.asarray(t, dtype=float)
        ts = np.atleast_1d(t)
        ti = 1.0 - ts
        weights = np.column_stack([3.0 * ti**2, 6.0 * ts * ti, 3.0 * ts**2])
        result = weights @ np.diff(self.as_array(), axis=0)
        if t.ndim == 0:
            return result[0]
        return result

    # ------------------------------------------------------------------
    #  Nouvelles courbes
    # ------------------------------------------------------------------

    def reversed(self):
        """Courbe parcourue en sens inverse : (P3, P2, P1, P0).

        La geometrie est identique, seul le sens de parcours change.

        :rtype: CubicBezier
        """
        return CubicBezier(self._p3, self._p2, self._p1, self._p0,
                           backend=self._backend)

    def with_backend(self, backend):
        """Memes coordonnees dans une autre representation de points.

        :param backend: instance AbstractVectorOps ou nom enregistre
        :rtype: CubicBezier
        """
        ops = self._backend
        pts = [(ops.get_x(p), ops.get_y(p)) for p in self.control_points]
        return CubicBezier(*pts, backend=backend)

    # ------------------------------------------------------------------
    #  Egalite et hash
    # ------------------------------------------------------------------

    def equals(self, other):
        """Egalite structurelle : memes 4 points, composante par composante.

        Comparaison exacte, sans tolerance. Deux courbes de backends
        differents ne sont jamais egales (leurs hashs ne sont pas
        comparables).

        :rtype: bool
        """
        if not isinstance(other, CubicBezier):
            return False
        if self._backend.name != other._backend.name:
            return False
        return all(same_component(a, b) for a, b in
                   zip(self._components(), other._components()))

    def equals_or_close(self, other, epsilon=None):
        """Egalite a une tolerance pres des 4 points de controle.

        :param other: autre courbe
        :type other: CubicBezier
        :param epsilon: seuil sur la distance au carre (defaut : celui
            du backend)
        :rtype: bool
        """
        if not isinstance(other, CubicBezier):
            return False
        ops = self._backend
        return all(ops.equals_or_close(a, ops.coerce(b), epsilon)
                   for a, b in zip(self.control_points,
                                   other.control_points))

    def __eq__(self, other):
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return not self.equals(other)

    def get_hash_code(self):
        """Hash de Jenkins des composantes, dans l'ordre
        p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, p3.x, p3.y.

        :returns: entier signe 32 bits
        :rtype: int
        """
        ops = self._backend
        h = JenkinsHash()
        for value in self._components():
            h.mix(ops.hash_component(value))
        return h.finalize()

    def __hash__(self):
        return self.get_hash_code()

    # ------------------------------------------------------------------
    #  Representation
    # ------------------------------------------------------------------

    def __str__(self):
        ops = self._backend
        coords = ['<%s, %s>' % (_format_n3(ops.component_text(ops.get_x(p))),
                                _format_n3(ops.component_text(ops.get_y(p))))
                  for p in self.control_points]
        return 'CubicBezier: (%s)' % ' '.join(coords)

    def __repr__(self):
        return "CubicBezier(%r, %r, %r, %r, backend='%s')" % (
            self._p0, self._p1, self._p2, self._p3, self._backend.name)

    # ------------------------------------------------------------------
    #  Visualisation
    # ------------------------------------------------------------------

    def plot(self, ax=None, show=True, control_polygon=True, n_samples=None,
             label=None):
        """Trace la courbe de Bezier.

        :param ax: axes matplotlib existants (None = creation)
        :param show: appeler plt.show() a la fin
        :param control_polygon: afficher le polygone de controle
        :param n_samples: nombre de points du trace (defaut PLOT_SAMPLES)
        :param label: legende de la courbe
        :returns: axes matplotlib
        """
        import matplotlib.pyplot as plt

        if ax is None:
            fig, ax = plt.subplots(1, 1, figsize=(10, 6))
        if n_samples is None:
            n_samples = plot_samples()

        pts = self.evaluate(np.linspace(0, 1, n_samples))
        ax.plot(pts[:, 0], pts[:, 1], 'b-', linewidth=1.5,
                label=label or 'CubicBezier')

        if control_polygon:
            cpts = self.as_array()
            ax.plot(cpts[:, 0], cpts[:, 1],
                    'o--', color='gray', linewidth=0.8, markersize=4,
                    label='Polygone de controle')
            ax.plot(cpts[0, 0], cpts[0, 1], 'ro', markersize=6, label='P0')
            ax.plot(cpts[-1, 0], cpts[-1, 1], 'gs', markersize=6, label='P3')

        ax.set_aspect('equal')
        ax.grid(True, alpha=0.3)
        ax.legend(fontsize=8)

        if show:
            plt.show()

        return ax
