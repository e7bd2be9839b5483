"""geometry.py - Rotation Utility Functions"""
from __future__ import annotations

import numpy.typing as npt

import numpy as np

import scipy.spatial.transform as sptl

__all__ = ['as_rotation', 'euler_rotation', 'identity_rotation',   # rotations
           'is_proper_rotation',
           'skew_symmetric_matrix']                                # helpers

# %% Rotations
def identity_rotation() -> sptl.Rotation:
    """Identity rotation

    :return: Rotation that leaves every vector unchanged
    :rtype: scipy.spatial.transform.Rotation
    """
    return sptl.Rotation.identity()

def euler_rotation(angle: npt.ArrayLike, sequence: str = 'ZYX',
                   degrees: bool = True) -> sptl.Rotation:
    """Rotation from Euler / Tait-Bryan angles

    :param angle: Rotation angles in sequence order
    :type angle: numpy.typing.ArrayLike

    :param sequence: Rotation angle sequence, defaults to 'ZYX' (intrinsic)
    :type sequence: str, optional

    :param degrees: Unit of rotation angles, defaults to True
    :type degrees: bool, optional

    :return: Rotation
    :rtype: scipy.spatial.transform.Rotation
    """
    return sptl.Rotation.from_euler(sequence, angle, degrees)

def is_proper_rotation(matrix: npt.ArrayLike, tol: float = 1e-9) -> bool:
    """Checks orthonormality and unit determinant of a :math:`3 \\times 3` matrix

    :param matrix: Candidate rotation matrix
    :type matrix: numpy.typing.ArrayLike

    :param tol: Absolute tolerance, defaults to 1e-9
    :type tol: float, optional

    :return: True if the matrix is in :math:`SO(3)`
    :rtype: bool
    """
    M = np.asarray(matrix, dtype=np.double)
    if M.shape != (3, 3):
        return False
    return bool(np.allclose(M @ M.T, np.eye(3), atol=tol)
                and abs(np.linalg.det(M) - 1) <= tol)

def as_rotation(value: sptl.Rotation | npt.ArrayLike | None) -> sptl.Rotation:
    """Coerces input into a single proper rotation

    Accepts a :code:`scipy.spatial.transform.Rotation`, a :math:`3 \\times 3`
    rotation matrix, a scalar-last unit quaternion or a rotation vector. None
    maps to the identity.

    :param value: Rotation like input
    :type value: scipy.spatial.transform.Rotation | numpy.typing.ArrayLike | None

    :raises ValueError: If the input is not a single proper rotation

    :return: Rotation
    :rtype: scipy.spatial.transform.Rotation
    """
    if value is None:
        return identity_rotation()

    if isinstance(value, sptl.Rotation):
        if not value.single:
            raise ValueError('Expected a single rotation, got a stack')
        return value

    # Copy; scipy constructors reject read-only buffers
    array = np.array(value, dtype=np.double)
    if array.shape == (3, 3):
        if not is_proper_rotation(array):
            raise ValueError('Matrix is not a proper rotation (reflection or scaling present)')
        return sptl.Rotation.from_matrix(array)
    elif array.shape == (4,):
        if not np.isclose(np.linalg.norm(array), 1.0):
            raise ValueError('Quaternion is not normalized')
        return sptl.Rotation.from_quat(array)
    elif array.shape == (3,):
        return sptl.Rotation.from_rotvec(array)

    raise ValueError(f"Cannot interpret array of shape {array.shape} as a rotation")

# %% Helpers
def skew_symmetric_matrix(v: npt.ArrayLike) -> np.ndarray:
    r"""Creates skew symmetric cross-product matrix corresponding
    to vector in :math:`\mathbb{R}^3`

    :param v: Input vector
    :type v: numpy.typing.ArrayLike

    :return: Skew symmetric cross-product matrix
    :rtype: numpy.ndarray
    """
    v = np.asarray(v, dtype=np.double)
    return np.array([[ 0   , -v[2],  v[1]],
                     [ v[2],  0   , -v[0]],
                     [-v[1],  v[0],  0   ]])
