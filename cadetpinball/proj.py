"""Perspective projection from table space to screen pixels."""

from __future__ import annotations

from typing import Sequence

from .maths import Vector, magnitude

__all__ = ["Projection", "matrix_vector_multiply"]

_ZERO_DEPTH_COEF = 999999.88


def matrix_vector_multiply(matrix: Sequence[Sequence[float]], vec: Vector) -> Vector:
    """Apply the first three rows of a row-major 4x4 matrix to a point."""
    rows = []
    for mx, my, mz, mw in matrix[:3]:
        rows.append(vec.z * mz + vec.y * my + vec.x * mx + mw)
    return Vector(*rows)


class Projection:
    """Camera transform with a perspective divide and a screen centre."""

    def __init__(self, mat4x3: Sequence[float], d: float, center_x: float, center_y: float) -> None:
        values = [float(v) for v in mat4x3]
        if len(values) != 12:
            raise ValueError("projection matrix needs 12 values (3 rows of 4)")
        self.matrix: tuple[tuple[float, ...], ...] = (
            tuple(values[0:4]),
            tuple(values[4:8]),
            tuple(values[8:12]),
            (0.0, 0.0, 0.0, 1.0),
        )
        self.d = d
        self.center_x = center_x
        self.center_y = center_y

    def z_distance(self, vec: Vector) -> float:
        """Distance of a point from the camera."""
        return magnitude(matrix_vector_multiply(self.matrix, vec))

    def xform_to_2d(self, vec: Vector) -> tuple[int, int]:
        """Project a point to integer screen coordinates."""
        cam = matrix_vector_multiply(self.matrix, vec)
        coef = _ZERO_DEPTH_COEF if cam.z == 0.0 else self.d / cam.z
        return int(cam.x * coef + self.center_x), int(cam.y * coef + self.center_y)

    def recenter(self, center_x: float, center_y: float) -> None:
        self.center_x = center_x
        self.center_y = center_y