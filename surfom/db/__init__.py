"""Static tables used by the surface organic matter model."""
import os

#: Path of the residue type registry shipped with the package
DEFAULT_RESIDUE_TYPES = os.path.join(os.path.dirname(__file__), "residue_types.yaml")
