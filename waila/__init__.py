from .core.errors import ClassificationError, SchemeMismatchError, UnrecognizedError
from .core.settings import VERSION
from .params import PaymentDescriptor, PaymentParams, classify

__version__ = VERSION

__all__ = [
    "ClassificationError",
    "PaymentDescriptor",
    "PaymentParams",
    "SchemeMismatchError",
    "UnrecognizedError",
    "classify",
]
