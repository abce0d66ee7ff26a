"""Exception hierarchy for Textrude."""


class TextrudeError(Exception):
    """Base exception for all Textrude errors."""

    pass


class FontError(TextrudeError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FaceIndexError(FontError):
    """Requested face does not exist in the font file or collection."""

    def __init__(self, path: str, face_index: int, face_count: int) -> None:
        self.path = path
        self.face_index = face_index
        self.face_count = face_count
        plural = "" if face_count == 1 else "s"
        super().__init__(
            f"Face index {face_index} is out of range for '{path}' "
            f"(available 0..{face_count - 1}; font has {face_count} face{plural})"
        )


class ConfigurationError(TextrudeError):
    """Invalid option value or option combination."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GeometryError(TextrudeError):
    """Errors in geometric calculations."""

    pass


class TriangulationError(GeometryError):
    """Malformed input handed to the polygon triangulator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class MeshWriteError(TextrudeError):
    """Error serializing the mesh to its destination."""

    def __init__(self, destination: str, reason: str) -> None:
        self.destination = destination
        self.reason = reason
        super().__init__(f"Failed to write mesh to '{destination}': {reason}")
