from .photo import Photo
from .user import User

__all__ = ['Photo', 'User']
