from .base import DensityModel, FunctionDensity, as_density_model
from .normal import NormalDistribution
from .uniform import UniformDistribution
from .banana import BananaDistribution
from .mixture import MixtureDistribution
from .product import ProductDensity

__all__ = [
    'DensityModel',
    'FunctionDensity',
    'as_density_model',
    'NormalDistribution',
    'UniformDistribution',
    'BananaDistribution',
    'MixtureDistribution',
    'ProductDensity',
]
