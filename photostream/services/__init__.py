# Service layer modules
from .photo_service import PhotoService
from .user_service import UserService
from .service_container import ServiceContainer

__all__ = ['PhotoService', 'UserService', 'ServiceContainer']
