#!/usr/bin/python
#-*-coding: utf-8 -*-

"""
Lecture des fichiers de configuration des courbes.

Format : cle=valeur, une par ligne. Les lignes commencant par # sont ignorees.
Les types sont inferes automatiquement (bool, int, float, str).

Le backend vectoriel par defaut des courbes est construit a partir de
``defaults_curves.cfg`` au premier besoin, et peut etre remplace par
:func:`set_default_backend`.

@author: Nervures
@date: 2026-02
"""

import logging
import os

from .base import AbstractVectorOps
from .vector import available_backends, get_backend

logger = logging.getLogger(__name__)

_DEFAULT_BACKEND = None
_DEFAULT_PARAMS = None


def _parse_value(value_str):
    """Infere le type d'une valeur depuis sa representation texte.

    :param value_str: valeur brute lue depuis le fichier
    :type value_str: str
    :returns: valeur typee (bool, int, float ou str)
    """
    s = value_str.strip()
    # Booleens
    if s.lower() in ('true', 'yes', 'on'):
        return True
    if s.lower() in ('false', 'no', 'off'):
        return False
    # Entier
    try:
        return int(s)
    except ValueError:
        pass
    # Flottant
    try:
        return float(s)
    except ValueError:
        pass
    # Chaine
    return s


def load_config(filepath):
    """Charge un fichier de configuration cle=valeur.

    :param filepath: chemin du fichier .cfg
    :type filepath: str
    :returns: dictionnaire des parametres
    :rtype: dict
    :raises IOError: si le fichier n'existe pas
    """
    if not os.path.isfile(filepath):
        raise IOError("Fichier de configuration introuvable : %s" % filepath)
    params = {}
    with open(filepath, 'r') as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                logger.warning("%s:%d : ligne ignoree (pas de '=') : %r",
                               filepath, lineno, line)
                continue
            key, value = line.split('=', 1)
            params[key.strip()] = _parse_value(value)
    logger.info("Configuration chargee : %s (%d parametres)",
                filepath, len(params))
    return params


def load_defaults():
    """Charge les parametres par defaut (defaults_curves.cfg).

    :returns: parametres par defaut
    :rtype: dict
    """
    cfg_dir = os.path.dirname(os.path.abspath(__file__))
    return load_config(os.path.join(cfg_dir, 'defaults_curves.cfg'))


def merge_params(defaults, user_params):
    """Fusionne les parametres utilisateur avec les defauts.

    Les parametres utilisateur surchargent les defauts.

    :param defaults: parametres par defaut
    :type defaults: dict
    :param user_params: parametres utilisateur (peuvent etre None)
    :type user_params: dict or None
    :returns: parametres fusionnes
    :rtype: dict
    """
    merged = dict(defaults)
    if user_params:
        for key, value in user_params.items():
            merged[key] = value
    return merged


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_params(params):
    """Verifie les parametres des courbes presents dans params.

    Les cles absentes ne sont pas verifiees ; les cles inconnues sont
    conservees telles quelles.

    :param params: parametres (voir defaults_curves.cfg)
    :type params: dict
    :returns: params
    :rtype: dict
    :raises ValueError: backend non enregistre, tolerance negative,
        epsilon non strictement positif ou PLOT_SAMPLES < 2
    """
    name = params.get('VECTOR_BACKEND')
    if name is not None and name not in available_backends():
        raise ValueError(
            "VECTOR_BACKEND '%s' inconnu. Disponibles : %s"
            % (name, ', '.join(available_backends())))
    tol = params.get('NORMALIZE_TOLERANCE')
    if tol is not None and not (_is_number(tol) and tol >= 0):
        raise ValueError(
            "NORMALIZE_TOLERANCE doit etre un nombre >= 0, recu %r" % (tol,))
    for key in ('EQUALS_EPSILON', 'SINGLE_EQUALS_EPSILON'):
        eps = params.get(key)
        if eps is not None and not (_is_number(eps) and eps > 0):
            raise ValueError(
                "%s doit etre un nombre > 0, recu %r" % (key, eps))
    samples = params.get('PLOT_SAMPLES')
    if samples is not None and not (
            isinstance(samples, int) and not isinstance(samples, bool)
            and samples >= 2):
        raise ValueError(
            "PLOT_SAMPLES doit etre un entier >= 2, recu %r" % (samples,))
    return params


def default_params():
    """Parametres par defaut, lus et verifies une seule fois.

    :rtype: dict
    """
    global _DEFAULT_PARAMS
    if _DEFAULT_PARAMS is None:
        _DEFAULT_PARAMS = validate_params(load_defaults())
    return dict(_DEFAULT_PARAMS)


def backend_from_params(params, name=None):
    """Instancie un backend vectoriel selon les parametres.

    :param params: parametres (voir defaults_curves.cfg)
    :type params: dict
    :param name: nom du backend, ``VECTOR_BACKEND`` si None
    :type name: str or None
    :rtype: AbstractVectorOps
    :raises ValueError: si les parametres sont invalides
    """
    validate_params(params)
    if name is None:
        name = params.get('VECTOR_BACKEND', 'double')
    kwargs = {}
    if 'NORMALIZE_TOLERANCE' in params:
        kwargs['normalize_tolerance'] = params['NORMALIZE_TOLERANCE']
    eps_key = 'SINGLE_EQUALS_EPSILON' if name == 'single' else 'EQUALS_EPSILON'
    if eps_key in params:
        kwargs['equals_epsilon'] = params[eps_key]
    return get_backend(name, **kwargs)


def resolve_backend(backend):
    """Backend a utiliser pour une courbe.

    :param backend: instance, nom enregistre, ou None (backend par defaut)
    :rtype: AbstractVectorOps
    :raises TypeError: si backend n'est ni un nom ni un AbstractVectorOps
    """
    if backend is None:
        return get_default_backend()
    if isinstance(backend, AbstractVectorOps):
        return backend
    if isinstance(backend, str):
        return backend_from_params(default_params(), name=backend)
    raise TypeError(
        "backend doit etre un nom ou un AbstractVectorOps, recu %s"
        % type(backend).__name__)


def get_default_backend():
    """Backend vectoriel par defaut, construit une seule fois.

    :rtype: AbstractVectorOps
    """
    global _DEFAULT_BACKEND
    if _DEFAULT_BACKEND is None:
        _DEFAULT_BACKEND = backend_from_params(default_params())
        logger.info("Backend vectoriel par defaut : %s",
                    _DEFAULT_BACKEND.name)
    return _DEFAULT_BACKEND


def set_default_backend(backend, params=None):
    """Remplace le backend par defaut.

    :param backend: instance AbstractVectorOps, nom, ou None pour revenir
        a la configuration
    :param params: parametres utilisateur (surchargent les defauts),
        utilises si backend est un nom
    :type params: dict or None
    :returns: le nouveau backend par defaut
    :rtype: AbstractVectorOps
    """
    global _DEFAULT_BACKEND
    if backend is None:
        _DEFAULT_BACKEND = None
        return get_default_backend()
    if isinstance(backend, str):
        backend = backend_from_params(
            merge_params(default_params(), params), name=backend)
    elif not isinstance(backend, AbstractVectorOps):
        raise TypeError(
            "backend doit etre un nom ou un AbstractVectorOps, recu %s"
            % type(backend).__name__)
    _DEFAULT_BACKEND = backend
    logger.info("Backend vectoriel par defaut : %s", backend.name)
    return backend


def plot_samples():
    """Nombre de points du trace par defaut (``PLOT_SAMPLES``)."""
    return int(default_params().get('PLOT_SAMPLES', 200))
