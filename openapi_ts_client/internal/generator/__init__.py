from .client_generator import ClientGenerator
from .example_generator import ExampleGenerator

__all__ = ["ClientGenerator", "ExampleGenerator"]
