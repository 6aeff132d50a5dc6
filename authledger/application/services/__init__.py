from .password_hashing import WerkzeugPasswordHasher
from .token_generator import AlphabetTokenGenerator

__all__ = ["AlphabetTokenGenerator", "WerkzeugPasswordHasher"]
