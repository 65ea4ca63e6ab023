from .pools import OMFraction, ResiduePool, ResidueTypeConstants, ResiduePoolStore
from .decomposition import (
    FOM,
    SurfaceOrganicMatterDecomp,
    SurfaceOrganicMatterDecompPool,
)
from .transfers import Faeces, FOMPoolLayer, FOMPoolProfile
from .nutrient import NutrientModel, UnlimitedNutrientModel
from .surface_om import SurfaceOrganicMatter
