"""
Convex areas on the unit sphere.

A :class:`ConvexArea` is the intersection of the minus (pole side)
hemispheres of zero or more great circles.  It is stored as the list of
its boundary arcs: each bounding circle's full span trimmed by every
other bound, keeping the part on their minus sides.  Bounds that end up
with no arc are redundant and dropped; classification, size and
centroid never depend on them.

The area with no boundaries is the whole sphere.  It is a shared
singleton returned by :meth:`ConvexArea.full` and every factory that
receives no constraining input.

Size uses the spherical excess (Girard's theorem) over the interior
angles of the boundary loop.  The centroid is computed from a weighted
centroid vector, ``2 ∫ x dA`` over the area, which has two useful
properties: its direction is the centroid and the vectors of the two
halves of a split add up to the vector of the whole.  Polygons are
decomposed into a fan of triangles whose vectors are evaluated with a
cancellation‑free rearrangement, switching to the normalised vertex sum
for triangles too small for the exact formula to resolve.

Verbose diagnostics are emitted when ``SPHERE_DEBUG`` is enabled.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Union

from ..config import debug_enabled, default_precision
from .arcs import GreatArc
from .circles import GreatCircle, PointLike
from .errors import DegenerateGeometryError, InvalidBoundaryError
from .locations import HyperplaneLocation, RegionLocation, Split, SplitLocation
from .paths import BoundaryPath, connect_arcs
from .points import Point2S
from .precision import Precision
from .vectors import ZERO, Vec3, add, angle, cross, dot, norm, scale, sub, vec_sum, with_norm

if TYPE_CHECKING:
    from .boundary_list import BoundaryList
    from .region_tree import RegionTree

logger = logging.getLogger(__name__)

FULL_SIZE = 4.0 * math.pi
HALF_SIZE = 2.0 * math.pi

# Triangles whose sides are all shorter than this use the vertex sum approximation
_SMALL_TRIANGLE_ANGLE = 1e-4


class ConvexArea:
    """Convex region of the sphere bounded by great arcs.

    Instances are immutable.  Use the ``from_*`` factories rather than
    the constructor, which trusts that ``boundaries`` already form a
    convex loop.
    """

    def __init__(self, boundaries: Sequence[GreatArc] = ()) -> None:
        self._boundaries = tuple(boundaries)
        self._path: Optional[BoundaryPath] = None

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def full() -> "ConvexArea":
        """Return the shared area covering the whole sphere."""
        return _FULL

    @classmethod
    def from_bounds(cls, *bounds: Union[GreatCircle, Iterable[GreatCircle]]) -> "ConvexArea":
        """Create the area on the minus side of every given circle.

        Accepts the circles as positional arguments or as one iterable.
        A circle appearing more than once (the same object or an equal
        oriented circle) contributes a single boundary.

        Returns:
            ConvexArea: The area, or the full sphere when no circle is
            given.

        Raises:
            InvalidBoundaryError: If two bounds coincide with opposite
                orientations or the bounds leave no area.
        """
        if len(bounds) == 1 and not isinstance(bounds[0], GreatCircle):
            bounds = tuple(bounds[0])
        circles: List[GreatCircle] = list(bounds)
        if not circles:
            return _FULL

        boundaries: List[GreatArc] = []
        for idx, circle in enumerate(circles):
            arc = _trim_bound(circle, circles, idx)
            if arc is not None:
                boundaries.append(arc)
        if len(circles) > 1 and not boundaries:
            raise InvalidBoundaryError(
                f"bounds do not form a convex region: no boundary survives among {len(circles)} circles"
            )
        if debug_enabled():
            logger.debug(
                "ConvexArea built from %d bounds: %d boundaries retained",
                len(circles),
                len(boundaries),
            )
        return cls(boundaries)

    @classmethod
    def from_path(cls, path: BoundaryPath) -> "ConvexArea":
        """Create an area bounded by the circles of ``path``'s arcs."""
        if path.is_empty():
            return _FULL
        return cls.from_bounds([arc.circle for arc in path])

    @classmethod
    def from_vertices(
        cls,
        vertices: Iterable[Point2S],
        skip_degenerate: bool = True,
        precision: Optional[Precision] = None,
        close: bool = True,
    ) -> "ConvexArea":
        """Create an area from a sequence of vertices.

        Each consecutive vertex pair defines a bounding circle oriented so
        that the area lies to the left when walking from one vertex to the
        next, i.e. vertices go counter‑clockwise around the interior.

        Args:
            vertices: The vertices in traversal order.
            skip_degenerate: Whether consecutive vertices equal under the
                tolerance are silently skipped (``True``) or rejected.
            precision: Tolerance for the new circles; defaults to the
                configured precision.
            close: Whether the last vertex connects back to the first.
                With ``False`` the vertices describe an open path and only
                the circles between consecutive vertices are used.

        Returns:
            ConvexArea: The area; the full sphere for an empty sequence.

        Raises:
            InvalidBoundaryError: If fewer than two usable vertices remain,
                a repeated vertex is found while ``skip_degenerate`` is
                false, two consecutive vertices are antipodal, or the
                resulting circles do not bound a convex area.
        """
        precision = precision or default_precision()
        points = list(vertices)
        if not points:
            return _FULL

        circles: List[GreatCircle] = []
        first = points[0]
        prev: Optional[Point2S] = None
        for cur in points:
            if prev is not None:
                if cur.eq(prev, precision):
                    if not skip_degenerate:
                        raise InvalidBoundaryError(f"repeated vertex {cur} in vertex sequence")
                else:
                    circles.append(_circle_between(prev, cur, precision))
            prev = cur
        if close and circles and not prev.eq(first, precision):
            circles.append(_circle_between(prev, first, precision))

        if not circles:
            raise InvalidBoundaryError(
                f"cannot create a convex area from {len(points)} vertices: fewer than 2 are distinct"
            )
        return cls.from_bounds(circles)

    @classmethod
    def from_vertex_loop(
        cls, vertices: Iterable[Point2S], precision: Optional[Precision] = None
    ) -> "ConvexArea":
        """Create an area from vertices forming a closed counter‑clockwise loop."""
        return cls.from_vertices(vertices, skip_degenerate=True, precision=precision, close=True)

    @classmethod
    def from_tree(cls, tree: "RegionTree") -> "ConvexArea":
        """Convert a region tree describing a single convex area.

        Raises:
            InvalidBoundaryError: If the tree is empty or its inside
                decomposes into more than one convex piece.
        """
        pieces = tree.to_convex()
        if len(pieces) != 1:
            raise InvalidBoundaryError(
                f"region tree is not a single convex area ({len(pieces)} convex pieces)"
            )
        return pieces[0]

    # ------------------------------------------------------------------
    # Basic properties
    # ------------------------------------------------------------------

    def is_full(self) -> bool:
        return not self._boundaries

    def is_empty(self) -> bool:
        # Construction rejects bounds with no common area
        return False

    def boundaries(self) -> List[GreatArc]:
        return list(self._boundaries)

    def circles(self) -> List[GreatCircle]:
        return [arc.circle for arc in self._boundaries]

    def __len__(self) -> int:
        return len(self._boundaries)

    def boundary_path(self) -> BoundaryPath:
        """Return the boundary arcs connected into a single path.

        The path is empty for the full sphere and a single full circle for
        a hemisphere; otherwise it is a closed counter‑clockwise loop
        starting at the vertex with the smallest polar angle.
        """
        if self._path is None:
            paths = connect_arcs(self._boundaries)
            self._path = paths[0] if paths else BoundaryPath.empty()
        return self._path

    to_boundary_path = boundary_path

    def vertices(self) -> List[Point2S]:
        return self.boundary_path().vertices

    def boundary_size(self) -> float:
        """Total length of the boundary; ``2π`` for a hemisphere."""
        return math.fsum(arc.size for arc in self._boundaries)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, point: PointLike) -> RegionLocation:
        """Classify ``point`` relative to the area.

        Returns:
            OUTSIDE if the point is on the plus side of any bounding
            circle, BOUNDARY if it lies on at least one of them and
            INSIDE otherwise.
        """
        on_boundary = False
        for arc in self._boundaries:
            loc = arc.circle.classify(point)
            if loc == HyperplaneLocation.PLUS:
                return RegionLocation.OUTSIDE
            if loc == HyperplaneLocation.ON:
                on_boundary = True
        return RegionLocation.BOUNDARY if on_boundary else RegionLocation.INSIDE

    def contains(self, point: PointLike) -> bool:
        return self.classify(point) != RegionLocation.OUTSIDE

    # ------------------------------------------------------------------
    # Measures
    # ------------------------------------------------------------------

    def interior_angles(self) -> List[float]:
        """Return the interior angle at each vertex of the boundary loop.

        The angle at the end of arc ``i`` is ``π`` minus the signed angle
        between its circle and the circle of arc ``i + 1``.  Areas with
        fewer than two boundaries have no vertices and return an empty
        list.
        """
        arcs = self.boundary_path().arcs
        count = len(arcs)
        if count < 2:
            return []
        angles = []
        for i, current in enumerate(arcs):
            nxt = arcs[(i + 1) % count]
            angles.append(math.pi - current.circle.angle(nxt.circle, current.end_point))
        return angles

    def size(self) -> float:
        """Return the area (solid angle) in steradians."""
        count = len(self._boundaries)
        if count == 0:
            return FULL_SIZE
        if count == 1:
            return HALF_SIZE
        # Girard's theorem: excess of the interior angle sum
        return math.fsum(self.interior_angles()) - (count - 2) * math.pi

    def weighted_centroid_vector(self) -> Optional[Vec3]:
        """Return ``2 ∫ x dA`` over the area, or ``None`` for the full sphere.

        The direction of the vector is the centroid.  Vectors of
        disjoint areas add, so the vector of a split area equals the sum
        of the vectors of its two pieces.
        """
        count = len(self._boundaries)
        if count == 0:
            return None
        if count == 1:
            return scale(self._boundaries[0].circle.pole, HALF_SIZE)
        if count == 2:
            # Lune: the centroid sits midway between the arc midpoints
            first, second = self._boundaries
            mid = first.centroid.slerp(second.centroid, 0.5)
            weight = math.fsum(
                arc.size * dot(mid.vector, arc.circle.pole) for arc in self._boundaries
            )
            return scale(mid.vector, weight)

        vertices = [p.vector for p in self.vertices()[:-1]]
        apex = vertices[0]
        return vec_sum(
            _triangle_weighted_centroid(apex, vertices[i], vertices[i + 1])
            for i in range(1, len(vertices) - 1)
        )

    def centroid(self) -> Optional[Point2S]:
        """Return the centroid of the area, or ``None`` for the full sphere."""
        vec = self.weighted_centroid_vector()
        if vec is None or norm(vec) == 0.0:
            return None
        return Point2S.from_vector(vec)

    # ------------------------------------------------------------------
    # Operations producing new values
    # ------------------------------------------------------------------

    def trim(self, arc: GreatArc) -> Optional[GreatArc]:
        """Return the part of ``arc`` inside the area, or ``None``.

        Portions lying directly on a bounding circle are trimmed away.
        """
        remaining: Optional[GreatArc] = arc
        for boundary in self._boundaries:
            remaining = remaining.split(boundary.circle).minus
            if remaining is None:
                break
        return remaining

    def split(self, splitter: GreatCircle) -> Split["ConvexArea"]:
        """Split the area by ``splitter``.

        Returns:
            Split: For the full sphere, the two hemispheres of the
            splitter.  When the splitter does not pass through the
            interior, this same instance on the side it lies on.
            Otherwise two new areas: the minus part bounded by the
            existing circles plus the splitter and the plus part bounded
            by the existing circles plus the reversed splitter.
        """
        if self.is_full():
            return Split(
                ConvexArea.from_bounds(splitter),
                ConvexArea.from_bounds(splitter.reverse()),
            )

        trimmed = self.trim(splitter.span())
        if trimmed is None:
            side = self._side_of(splitter)
            if debug_enabled():
                logger.debug("Splitter misses area interior; area lies on %s side", side.value)
            if side == SplitLocation.MINUS:
                return Split(self, None)
            return Split(None, self)

        has_minus = False
        has_plus = False
        for boundary in self._boundaries:
            piece = boundary.split(splitter)
            has_minus = has_minus or piece.minus is not None
            has_plus = has_plus or piece.plus is not None
        # Splitting the splitter and splitting the boundaries can disagree
        # near the tolerance; trust the boundaries
        if not has_minus:
            return Split(None, self)
        if not has_plus:
            return Split(self, None)

        circles = self.circles()
        minus = ConvexArea.from_bounds(circles + [splitter])
        plus = ConvexArea.from_bounds(circles + [splitter.reverse()])
        if debug_enabled():
            logger.debug(
                "Split area of size %s into %s (minus) and %s (plus)",
                self.size(),
                minus.size(),
                plus.size(),
            )
        return Split(minus, plus)

    def _side_of(self, splitter: GreatCircle) -> SplitLocation:
        precision = splitter.precision
        signs = [
            precision.sign(splitter.offset(vertex))
            for arc in self._boundaries
            for vertex in arc.vertices
        ]
        if any(s > 0 for s in signs):
            return SplitLocation.PLUS
        if any(s < 0 for s in signs):
            return SplitLocation.MINUS
        # All vertices lie on the splitter (a lune or hemisphere); use the centroid
        centroid = self.centroid()
        if centroid is not None and splitter.offset(centroid) > 0.0:
            return SplitLocation.PLUS
        return SplitLocation.MINUS

    def transform(self, transform) -> "ConvexArea":
        """Apply a rotation or reflection.

        Reflections flip the orientation of every boundary circle, which
        would put the area on the plus side; the arcs are reversed in that
        case so the area stays on the minus side.
        """
        if self.is_full():
            return self
        reverse = not transform.preserves_orientation()
        arcs = []
        for arc in self._boundaries:
            t_arc = arc.transform(transform)
            arcs.append(t_arc.reverse() if reverse else t_arc)
        return ConvexArea(arcs)

    # ------------------------------------------------------------------
    # Equality and conversion
    # ------------------------------------------------------------------

    def eq(self, other: "ConvexArea") -> bool:
        """Return ``True`` if both areas have equivalent bounding circles."""
        if self is other:
            return True
        if len(self._boundaries) != len(other._boundaries):
            return False
        return all(
            any(arc.circle.eq(o.circle) for o in other._boundaries) for arc in self._boundaries
        )

    def to_boundary_list(self) -> "BoundaryList":
        # Local import to avoid cycles
        from .boundary_list import BoundaryList

        return BoundaryList(self._boundaries)

    def to_region_tree(self) -> "RegionTree":
        """Return a region tree covering this area; the full tree for the full sphere."""
        from .region_tree import RegionTree

        return RegionTree.from_boundaries(self._boundaries, full=True)

    def __repr__(self) -> str:
        if self.is_full():
            return "ConvexArea(full)"
        return f"ConvexArea(vertices={self.vertices()})"


def _circle_between(a: Point2S, b: Point2S, precision: Precision) -> GreatCircle:
    try:
        return GreatCircle.from_points(a, b, precision)
    except DegenerateGeometryError as exc:
        raise InvalidBoundaryError(f"cannot create a boundary between {a} and {b}") from exc


def _trim_bound(circle: GreatCircle, circles: Sequence[GreatCircle], idx: int) -> Optional[GreatArc]:
    """Trim ``circle``'s span by every other bound, keeping the minus part.

    Returns ``None`` if nothing remains or if an earlier bound already
    represents the same circle.
    """
    arc: Optional[GreatArc] = circle.span()
    for splitter_idx, splitter in enumerate(circles):
        if splitter is circle:
            if idx > splitter_idx:
                return None
            continue
        split = arc.split(splitter)
        if split.location == SplitLocation.NEITHER:
            if not circle.similar_orientation(splitter):
                raise InvalidBoundaryError(
                    "bounds coincide with opposite orientations and enclose no area"
                )
            if idx > splitter_idx:
                return None
        else:
            arc = split.minus
            if arc is None:
                return None
    return arc


def _theta_minus_sin(theta: float) -> float:
    """Return ``θ - sin θ`` without cancellation for small ``θ``."""
    if theta >= 1.0:
        return theta - math.sin(theta)
    theta_sq = theta * theta
    term = theta * theta_sq / 6.0
    total = term
    for n in range(3, 21, 2):
        term *= -theta_sq / ((n + 1) * (n + 2))
        total += term
    return total


def _triangle_weighted_centroid(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    """Weighted centroid vector of the spherical triangle ``a, b, c``.

    The exact value is ``Σ θ · unit(p × q)`` over the edges ``(p, q)``.
    Expanding ``θ / sin θ = 1 + (θ - sin θ) / sin θ`` separates the sum
    into ``(b - a) × (c - a)`` and small correction terms.  Tiny
    triangles fall back to the vertex sum scaled by twice the planar
    area, whose direction stays accurate when the vertices differ only
    in the last few digits.
    """
    edges = ((a, b), (b, c), (c, a))
    sides = [angle(p, q) for p, q in edges]
    planar = cross(sub(b, a), sub(c, a))
    if max(sides) < _SMALL_TRIANGLE_ANGLE:
        weight = norm(planar)
        if weight == 0.0:
            return ZERO
        return with_norm(add(add(a, b), c), weight)

    terms = [planar]
    for (p, q), theta in zip(edges, sides):
        pq = cross(p, q)
        sin_theta = norm(pq)
        if sin_theta == 0.0:
            continue
        terms.append(scale(pq, _theta_minus_sin(theta) / sin_theta))
    return vec_sum(terms)


_FULL = ConvexArea(())


__all__ = ["FULL_SIZE", "HALF_SIZE", "ConvexArea"]
