"""Options controlling what mesh readers and writers handle."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class IOFlags:
    """Flags to control reading and writing."""

    use_binary: bool = False
    use_vertex_normals: bool = False
    use_vertex_colors: bool = False
    use_vertex_texcoords: bool = False
    use_face_normals: bool = False
    use_face_colors: bool = False
    use_halfedge_texcoords: bool = False