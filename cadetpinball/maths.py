"""Geometry used by the table physics: rectangles, rays, lines and circles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

__all__ = [
    "NO_HIT",
    "Vector",
    "Rectangle",
    "Circle",
    "Ray",
    "Line",
    "WallPoint",
    "RampPlane",
    "enclosing_box",
    "rectangle_clip",
    "overlapping_box",
    "ray_intersect_circle",
    "normalize_2d",
    "line_init",
    "ray_intersect_line",
    "cross",
    "magnitude",
    "vector_add",
    "basic_collision",
    "distance_squared",
    "dot_product",
    "distance",
    "sin_cos",
    "rotate_pt",
    "rotate_vector",
    "find_closest_edge",
]

NO_HIT = 1_000_000_000.0
"""Distance reported when a ray hits nothing."""


@dataclass
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Rectangle:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class Circle:
    center: Vector = field(default_factory=Vector)
    radius_sq: float = 0.0


@dataclass
class Ray:
    origin: Vector = field(default_factory=Vector)
    direction: Vector = field(default_factory=Vector)
    max_distance: float = 0.0
    min_distance: float = 0.0
    time_now: float = 0.0
    time_delta: float = 0.0
    field_flag: int = 0


@dataclass
class Line:
    perpendicular_l: Vector = field(default_factory=Vector)
    direction: Vector = field(default_factory=Vector)
    pre_comp1: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    ray_intersect: Vector = field(default_factory=Vector)


@dataclass
class WallPoint:
    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0


@dataclass
class RampPlane:
    ball_collision_offset: Vector = field(default_factory=Vector)
    v1: Vector = field(default_factory=Vector)
    v2: Vector = field(default_factory=Vector)
    v3: Vector = field(default_factory=Vector)
    gravity_angle1: float = 0.0
    gravity_angle2: float = 0.0
    field_force: Vector = field(default_factory=Vector)


def enclosing_box(rect1: Rectangle, rect2: Rectangle) -> Rectangle:
    """Return the smallest rectangle holding both rectangles."""
    x, y, width, height = rect1.x, rect1.y, rect1.width, rect1.height
    if rect2.x < x:
        width += x - rect2.x
        x = rect2.x
    if rect2.y < y:
        height += y - rect2.y
        y = rect2.y
    if rect2.width + rect2.x > x + width:
        width = rect2.x + rect2.width - x
    if rect2.height + rect2.y > height + y:
        height = rect2.y + rect2.height - y
    return Rectangle(x, y, width, height)


def rectangle_clip(rect1: Rectangle, rect2: Rectangle) -> Rectangle | None:
    """Clip ``rect1`` to ``rect2``; return None when nothing is left."""
    x, y, width, height = rect1.x, rect1.y, rect1.width, rect1.height
    right2 = rect2.x + rect2.width
    bottom2 = rect2.y + rect2.height
    if x + width < rect2.x or x >= right2:
        return None
    if y + height < rect2.y or y >= bottom2:
        return None
    if x < rect2.x:
        width += x - rect2.x
        x = rect2.x
    if x + width > right2:
        width = right2 - x
    if y < rect2.y:
        height += y - rect2.y
        y = rect2.y
    if height + y > bottom2:
        height = bottom2 - y
    if not width or not height:
        return None
    return Rectangle(x, y, width, height)


def overlapping_box(rect1: Rectangle, rect2: Rectangle) -> tuple[Rectangle, bool]:
    """Return the spanning box of two rectangles and whether they overlap."""
    if rect1.x >= rect2.x:
        x = rect2.x
        width = rect1.width - rect2.x + rect1.x + 1
    else:
        x = rect1.x
        width = rect2.width - rect1.x + rect2.x + 1
    if rect1.y >= rect2.y:
        y = rect2.y
        height = rect1.height - rect2.y + rect1.y + 1
    else:
        y = rect1.y
        height = rect2.height - rect1.y + rect2.y + 1
    box = Rectangle(x, y, width, height)
    overlapping = width <= rect2.width + rect1.width and height <= rect2.height + rect1.height
    return box, overlapping


def ray_intersect_circle(ray: Ray, circle: Circle) -> float:
    """Distance along the ray to the circle, or NO_HIT."""
    lx = circle.center.x - ray.origin.x
    ly = circle.center.y - ray.origin.y
    tca = ly * ray.direction.y + lx * ray.direction.x
    if tca < 0.0:
        return NO_HIT

    l_mag_sq = ly * ly + lx * lx
    if l_mag_sq < circle.radius_sq:
        return tca - math.sqrt(circle.radius_sq - l_mag_sq + tca * tca)

    thc_sq = circle.radius_sq - l_mag_sq + tca * tca
    if thc_sq < 0.0:
        return NO_HIT

    t0 = tca - math.sqrt(thc_sq)
    if t0 < 0.0 or t0 > ray.max_distance:
        return NO_HIT
    return t0


def normalize_2d(vec: Vector) -> float:
    """Normalise the X/Y part of ``vec`` in place and return its former length."""
    mag = math.sqrt(vec.x * vec.x + vec.y * vec.y)
    if mag != 0.0:
        vec.x = 1.0 / mag * vec.x
        vec.y = 1.0 / mag * vec.y
    return mag


def line_init(x0: float, y0: float, x1: float, y1: float) -> Line:
    """Build a line segment between two points."""
    line = Line()
    line.direction = Vector(x1 - x0, y1 - y0)
    normalize_2d(line.direction)
    line.perpendicular_l = Vector(line.direction.y, -line.direction.x)
    line.pre_comp1 = -(line.direction.y * x0) + line.direction.x * y0
    if line.direction.x >= 1e-9 or line.direction.x <= -1e-9:
        end, reversed_, start = x1, x0 >= x1, x0
    else:
        line.direction.x = 0.0
        end, reversed_, start = y1, y0 >= y1, y0
    if reversed_:
        line.origin_x, line.origin_y = end, start
    else:
        line.origin_x, line.origin_y = start, end
    return line


def ray_intersect_line(ray: Ray, line: Line) -> float:
    """Distance along the ray to the line segment, or NO_HIT.

    On a hit within the ray's range the crossing point is stored in
    ``line.ray_intersect``.
    """
    perp = line.perpendicular_l
    perp_dot = perp.y * ray.direction.y + ray.direction.x * perp.x
    if perp_dot < 0.0:
        result = -((ray.origin.x * perp.x + ray.origin.y * perp.y + line.pre_comp1) / perp_dot)
        if -ray.min_distance <= result <= ray.max_distance:
            hit_x = result * ray.direction.x + ray.origin.x
            hit_y = result * ray.direction.y + ray.origin.y
            line.ray_intersect.x = hit_x
            line.ray_intersect.y = hit_y
            if line.direction.x == 0.0:
                if hit_y >= line.origin_x:
                    return result if hit_y <= line.origin_y else NO_HIT
            elif line.origin_x <= hit_x:
                return result if hit_x <= line.origin_y else NO_HIT
    return NO_HIT


def cross(vec1: Vector, vec2: Vector) -> Vector:
    """Cross product of two 3D vectors."""
    return Vector(
        vec2.z * vec1.y - vec2.y * vec1.z,
        vec2.x * vec1.z - vec1.x * vec2.z,
        vec1.x * vec2.y - vec2.x * vec1.y,
    )


def magnitude(vec: Vector) -> float:
    """Length of a 3D vector."""
    mag_sq = vec.x * vec.x + vec.y * vec.y + vec.z * vec.z
    return 0.0 if mag_sq == 0.0 else math.sqrt(mag_sq)


def vector_add(vec1: Vector, vec2: Vector) -> None:
    """Add the X/Y part of ``vec2`` to ``vec1`` in place."""
    vec1.x += vec2.x
    vec1.y += vec2.y


def basic_collision(
    ball: Any,
    next_position: Vector,
    direction: Vector,
    elasticity: float,
    smoothness: float,
    threshold: float,
    boost: float,
) -> float:
    """Bounce a ball off a surface with normal ``direction``.

    The ball needs ``position`` and ``acceleration`` vectors and a ``speed``.
    Returns the speed projected onto the surface normal.
    """
    ball.position.x = next_position.x
    ball.position.y = next_position.y
    accel = ball.acceleration
    proj = -(direction.y * accel.y + direction.x * accel.x)
    if proj < 0:
        proj = -proj
    else:
        dx1 = proj * direction.x
        dy1 = proj * direction.y
        accel.x = (dx1 + accel.x) * smoothness + dx1 * elasticity
        accel.y = (dy1 + accel.y) * smoothness + dy1 * elasticity
        normalize_2d(accel)
    proj_speed = proj * ball.speed
    new_speed = ball.speed - (1.0 - elasticity) * proj_speed
    ball.speed = new_speed
    if proj_speed >= threshold:
        accel.x = new_speed * accel.x + direction.x * boost
        accel.y = new_speed * accel.y + direction.y * boost
        ball.speed = normalize_2d(accel)
    return proj_speed


def distance_squared(vec1: Vector, vec2: Vector) -> float:
    dy = vec1.y - vec2.y
    dx = vec1.x - vec2.x
    return dy * dy + dx * dx


def dot_product(vec1: Vector, vec2: Vector) -> float:
    """Dot product of the X/Y parts."""
    return vec1.y * vec2.y + vec1.x * vec2.x


def distance(vec1: Vector, vec2: Vector) -> float:
    return math.sqrt(distance_squared(vec1, vec2))


def sin_cos(angle: float) -> tuple[float, float]:
    return math.sin(angle), math.cos(angle)


def rotate_pt(point: Vector, sin: float, cos: float, origin: Vector) -> None:
    """Rotate ``point`` in place about ``origin``."""
    dir_x = point.x - origin.x
    dir_y = point.y - origin.y
    point.x = dir_x * cos - dir_y * sin + origin.x
    point.y = dir_x * sin + dir_y * cos + origin.y


def rotate_vector(vec: Vector, angle: float) -> None:
    """Rotate ``vec`` in place, the way the table data expects.

    The Y component is computed from the already rotated X component, which
    is what the game's physics was tuned against.
    """
    s, c = math.sin(angle), math.cos(angle)
    vec.x = c * vec.x - s * vec.y
    vec.y = s * vec.x + c * vec.y


def find_closest_edge(planes: Sequence[RampPlane], wall: WallPoint) -> tuple[Vector, Vector] | None:
    """Find the plane edge closest to a wall.

    Returns ``(line_end, line_start)``, the plane's own vectors, or None when
    there are no planes.
    """
    wall_start = Vector(wall.x0, wall.y0)
    wall_end = Vector(wall.x1, wall.y1)
    best: tuple[Vector, Vector] | None = None
    best_distance = NO_HIT
    for plane in planes:
        for first, second in ((plane.v1, plane.v2), (plane.v2, plane.v3), (plane.v3, plane.v1)):
            dist = distance(wall_start, first) + distance(wall_end, second)
            if dist < best_distance:
                best_distance = dist
                best = (first, second)
    return best