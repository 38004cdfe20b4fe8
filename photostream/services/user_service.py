"""
User profile service
Optional display profiles keyed by the client-generated user id
"""
from typing import Dict, Optional, Any
from ..constants import IdentityConstants
from ..exceptions import ValidationError
from ..logger import user_logger as logger
from ..models.user import User
from ..validation_utils import default_username, require_text


class UserService:
    """
    Service for user display profiles
    """

    def save_profile(self, user_id: str, username: str, avatar: Optional[str] = None) -> Dict[str, Any]:
        """
        Create or update the display profile for user_id

        Existing photos keep the username/avatar they were uploaded with.

        Raises:
            ValidationError: If user_id or username is missing or too long
        """
        require_text(user_id, 'user_id', IdentityConstants.MAX_USER_ID_LENGTH)
        require_text(username, 'username', IdentityConstants.MAX_USERNAME_LENGTH)
        if avatar is not None and not isinstance(avatar, str):
            raise ValidationError("avatar must be a string", field='avatar')

        user = User.upsert(user_id, username.strip(), avatar or None)
        logger.log_service_operation("user_save_profile", user_id=user_id)

        return user.to_dict()

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the display profile for user_id

        Returns:
            Profile dict or None if the user never saved one
        """
        require_text(user_id, 'user_id')

        user = User.get_user(user_id)
        return user.to_dict() if user else None

    def resolve_username(self, user_id: str) -> str:
        """Saved username, or the default 'User' + last four id characters"""
        profile = self.get_profile(user_id)
        if profile and profile.get('username'):
            return profile['username']
        return default_username(user_id)
