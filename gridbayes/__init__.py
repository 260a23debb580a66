"""Grid approximation of a one-parameter normal posterior."""
from gridbayes.core import *
from gridbayes.core import __all__

__version__ = "0.1.0"
