"""
Geometry interop for polycsg using trimesh and COMPAS.

Converts boolean inputs and outputs to and from the mesh types used by
renderers and file-format libraries, and builds transformed copies of solids.
"""

from typing import Sequence

import numpy as np
import trimesh
from compas.datastructures import Mesh as CompasMesh
from compas.geometry import Point, Rotation, Scale, Transformation, Translation, Vector

from polycsg.core.exceptions import GeometryError
from polycsg.csg.polygon import Polygon
from polycsg.csg.solid import Solid
from polycsg.geometry.polyhedron import Polyhedron


class GeometryConverter:
    """
    Converter between polycsg and other geometry representations.

    Handles conversion between Polyhedron/Solid, Trimesh and COMPAS meshes.
    """

    @staticmethod
    def polyhedron_to_trimesh(mesh: Polyhedron) -> trimesh.Trimesh:
        """
        Convert a Polyhedron to a Trimesh by fan-triangulating each face.

        Args:
            mesh: Welded polyhedron

        Returns:
            Trimesh mesh object (vertex order preserved)

        Raises:
            GeometryError: If conversion fails
        """
        try:
            triangles = [
                (face[0], face[i], face[i + 1])
                for face in mesh.faces
                for i in range(1, len(face) - 1)
            ]
            return trimesh.Trimesh(
                vertices=np.array(mesh.vertices),
                faces=np.array(triangles, dtype=np.int64).reshape(-1, 3),
                process=False,
            )
        except Exception as e:
            raise GeometryError(f"Failed to convert Polyhedron to Trimesh: {e}") from e

    @staticmethod
    def polyhedron_to_compas(mesh: Polyhedron) -> CompasMesh:
        """
        Convert a Polyhedron to a COMPAS Mesh (polygon faces kept as-is).

        Raises:
            GeometryError: If conversion fails
        """
        try:
            vertices = mesh.vertices.tolist()
            faces = [list(face) for face in mesh.faces]
            return CompasMesh.from_vertices_and_faces(vertices, faces)
        except Exception as e:
            raise GeometryError(f"Failed to convert Polyhedron to COMPAS: {e}") from e

    @staticmethod
    def solid_from_trimesh(mesh: trimesh.Trimesh) -> Solid:
        """
        Build a Solid from a Trimesh, one triangle polygon per face.

        Raises:
            GeometryError: If conversion fails
        """
        try:
            vertices = np.asarray(mesh.vertices, dtype=np.float64)
            return Solid(
                [Polygon.from_points(vertices[face]) for face in np.asarray(mesh.faces)]
            )
        except Exception as e:
            raise GeometryError(f"Failed to convert Trimesh to Solid: {e}") from e

    @staticmethod
    def solid_from_compas(mesh: CompasMesh) -> Solid:
        """
        Build a Solid from a COMPAS Mesh, one polygon per face.

        Raises:
            GeometryError: If conversion fails
        """
        try:
            polygons = [
                Polygon.from_points(
                    [mesh.vertex_coordinates(v) for v in mesh.face_vertices(f)]
                )
                for f in mesh.faces()
            ]
            return Solid(polygons)
        except Exception as e:
            raise GeometryError(f"Failed to convert COMPAS to Solid: {e}") from e


class TransformationUtilities:
    """
    Utilities for geometric transformations of solids.

    Builds the transformation with COMPAS and applies its matrix to every
    polygon vertex.
    """

    @staticmethod
    def transform_solid(solid: Solid, transformation: Transformation) -> Solid:
        """
        Apply transformation to solid.

        Args:
            solid: Solid to transform
            transformation: COMPAS Transformation object

        Returns:
            Transformed Solid (new instance)
        """
        return solid.transformed(np.asarray(transformation.matrix, dtype=np.float64))

    @staticmethod
    def translate(solid: Solid, vector: Vector | Sequence[float]) -> Solid:
        """
        Translate solid by vector.

        Args:
            solid: Solid to translate
            vector: Translation vector (COMPAS Vector or [x, y, z])

        Returns:
            Translated solid (new instance)
        """
        if isinstance(vector, (list, tuple)):
            vector = Vector(*vector)

        t = Translation.from_vector(vector)
        return TransformationUtilities.transform_solid(solid, t)

    @staticmethod
    def rotate(
        solid: Solid,
        angle: float,
        axis: Vector | Sequence[float],
        point: Point | Sequence[float] | None = None,
    ) -> Solid:
        """
        Rotate solid around axis.

        Args:
            solid: Solid to rotate
            angle: Rotation angle in radians
            axis: Rotation axis
            point: Point to rotate around (default: origin)

        Returns:
            Rotated solid (new instance)
        """
        if isinstance(axis, (list, tuple)):
            axis = Vector(*axis)
        if point is None:
            point = Point(0, 0, 0)
        elif isinstance(point, (list, tuple)):
            point = Point(*point)

        t = Rotation.from_axis_and_angle(axis, angle, point)
        return TransformationUtilities.transform_solid(solid, t)

    @staticmethod
    def scale(solid: Solid, factor: float | tuple[float, float, float]) -> Solid:
        """
        Scale solid uniformly or non-uniformly about the origin.

        Args:
            solid: Solid to scale
            factor: Scale factor (uniform) or (x, y, z) factors; must be
                positive so the winding stays outward

        Returns:
            Scaled solid (new instance)

        Raises:
            GeometryError: If a factor is not positive
        """
        if isinstance(factor, (int, float)):
            factors = [float(factor)] * 3
        else:
            factors = [float(f) for f in factor]
        if any(f <= 0 for f in factors):
            raise GeometryError("Scale factors must be positive", details={"factors": factors})

        t = Scale.from_factors(factors)
        return TransformationUtilities.transform_solid(solid, t)
