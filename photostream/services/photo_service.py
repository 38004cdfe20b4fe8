"""
Photo feed service
Photo record lifecycle: create, paginated feed, per-user listing, like toggle, delete
"""
from typing import Any, Callable, Dict, List, Optional

from ..config import config
from ..constants import FeedConstants
from ..exceptions import (
    BlobStoreError, ConcurrentUpdateError, PhotoNotFoundError, UnauthorizedError, ValidationError
)
from ..logger import photo_logger as logger
from ..models.photo import Photo
from ..pagination import encode_cursor, decode_cursor
from ..utils import delete_blob, generate_public_url, generate_upload_url
from ..validation_utils import (
    current_time_millis, generate_photo_id, generate_storage_key, require_text, validate_page_size
)


def _is_feed_position(start_key: Dict[str, Any]) -> bool:
    """True if a decoded cursor has the shape produced by Photo.feed_position"""
    if set(start_key) != {'photo_id', 'feed_key', 'created_at'}:
        return False
    if not all(isinstance(value, dict) for value in start_key.values()):
        return False
    photo_id = start_key['photo_id'].get('S')
    created_at = start_key['created_at'].get('N')
    if start_key['feed_key'].get('S') != FeedConstants.FEED_PARTITION:
        return False
    if not isinstance(photo_id, str) or not photo_id:
        return False
    if not isinstance(created_at, str):
        return False
    try:
        int(created_at)
    except ValueError:
        return False
    return True


class PhotoService:
    """
    Stateless service over the Photo table and the photo bucket

    Every mutating call takes the caller's user_id explicitly.
    """

    def __init__(self, bucket_name: Optional[str] = None, clock: Optional[Callable[[], int]] = None):
        self.bucket_name = bucket_name or config.photo_bucket_name
        self.clock = clock or current_time_millis

    def create_photo(
        self,
        image_url: str,
        storage_id: str,
        user_id: str,
        username: str,
        user_avatar: Optional[str] = None
    ) -> str:
        """
        Record a photo whose bytes are already stored under storage_id

        Args:
            image_url: Resolvable location of the image bytes
            storage_id: Blob handle, used later to release the bytes
            user_id: Uploader's client identity
            username: Display name copied onto the record
            user_avatar: Optional avatar URL copied onto the record

        Returns:
            New photo id

        Raises:
            ValidationError: If a required field is missing or empty
            StoreError: If the insert fails
        """
        require_text(image_url, 'image_url')
        require_text(storage_id, 'storage_id')
        require_text(user_id, 'user_id')
        require_text(username, 'username')
        if user_avatar is not None and not isinstance(user_avatar, str):
            raise ValidationError("user_avatar must be a string", field='user_avatar')

        logger.log_service_operation("photo_create", user_id=user_id, storage_id=storage_id)

        photo = Photo.create_photo({
            'photo_id': generate_photo_id(),
            'image_url': image_url,
            'storage_id': storage_id,
            'user_id': user_id,
            'username': username,
            'user_avatar': user_avatar or None,
            'created_at': self.clock()
        })

        return photo.photo_id

    def list_feed(self, page_size: Any = None, cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        One page of the global feed, newest first

        One extra row is read past the page; has_more reports whether it
        existed, so an exhausted feed never hands out a dangling cursor.

        Args:
            page_size: Items per page (default and cap from config)
            cursor: Token from a previous page's next_cursor

        Returns:
            {'items', 'next_cursor', 'has_more', 'page_size'}

        Raises:
            ValidationError: If page_size or cursor is invalid
        """
        size = validate_page_size(page_size, config.feed_default_page_size, config.feed_max_page_size)
        start_key = decode_cursor(cursor)

        if start_key is not None and not _is_feed_position(start_key):
            raise ValidationError('Invalid cursor', field='cursor')

        photos = Photo.query_feed(limit=size + 1, last_evaluated_key=start_key)

        has_more = len(photos) > size
        page = photos[:size]
        next_cursor = encode_cursor(page[-1].feed_position()) if has_more else None

        logger.log_service_operation(
            "photo_list_feed",
            page_size=size,
            returned=len(page),
            has_more=has_more
        )

        return {
            'items': [photo.to_dict() for photo in page],
            'next_cursor': next_cursor,
            'has_more': has_more,
            'page_size': size
        }

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Every photo uploaded by user_id, newest first

        Unpaginated: a single user's upload count is expected to stay small.
        """
        require_text(user_id, 'user_id')

        photos = Photo.get_user_photos(user_id)
        return [photo.to_dict() for photo in photos]

    def get_photo(self, photo_id: str) -> Dict[str, Any]:
        require_text(photo_id, 'photo_id')

        photo = Photo.get_photo(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)
        return photo.to_dict()

    def toggle_like(self, photo_id: str, user_id: str) -> bool:
        """
        Like the photo if user_id has not liked it yet, otherwise unlike it

        Each attempt reads the photo, decides, then applies one conditional
        update that moves liked_by and likes together. A failed condition
        means the same user raced us, so the decision is re-read.

        Returns:
            New liked state for user_id

        Raises:
            PhotoNotFoundError: If the photo does not exist
            ConcurrentUpdateError: If every attempt lost its race
        """
        require_text(photo_id, 'photo_id')
        require_text(user_id, 'user_id')

        max_attempts = config.like_max_attempts

        for attempt in range(1, max_attempts + 1):
            photo = Photo.get_photo(photo_id)
            if photo is None:
                raise PhotoNotFoundError(photo_id)

            if photo.has_liked(user_id):
                applied = photo.remove_like(user_id)
                liked = False
            else:
                applied = photo.add_like(user_id)
                liked = True

            if applied:
                logger.log_service_operation(
                    "photo_toggle_like",
                    photo_id=photo_id,
                    user_id=user_id,
                    liked=liked,
                    attempt=attempt
                )
                return liked

        raise ConcurrentUpdateError(
            f"Like toggle on photo '{photo_id}' kept conflicting",
            operation='toggle_like',
            table=Photo.Meta.table_name,
            attempts=max_attempts
        )

    def delete_photo(self, photo_id: str, user_id: str) -> Dict[str, Any]:
        """
        Delete an owned photo and release its blob

        A blob that fails to delete after the record is gone is logged and
        reported as blob_released=False; the record is not restored.

        Returns:
            {'photo_id', 'deleted', 'blob_released', 'storage_id'}

        Raises:
            PhotoNotFoundError: If the photo does not exist
            UnauthorizedError: If user_id is not the uploader
        """
        require_text(photo_id, 'photo_id')
        require_text(user_id, 'user_id')

        logger.log_service_operation("photo_delete", photo_id=photo_id, user_id=user_id)

        photo = Photo.get_photo(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)

        if photo.user_id != user_id:
            logger.warning("Rejected delete by non-owner", photo_id=photo_id, user_id=user_id)
            raise UnauthorizedError(
                "Unauthorized",
                resource=f"photo/{photo_id}",
                action='delete'
            )

        if not photo.delete_owned(user_id):
            raise PhotoNotFoundError(photo_id)

        blob_released = True
        try:
            delete_blob(self.bucket_name, photo.storage_id)
        except BlobStoreError as e:
            blob_released = False
            logger.error(
                "Photo record deleted but blob release failed; blob orphaned",
                error=e,
                photo_id=photo_id,
                storage_id=photo.storage_id,
                bucket=self.bucket_name
            )

        return {
            'photo_id': photo_id,
            'deleted': True,
            'blob_released': blob_released,
            'storage_id': photo.storage_id
        }

    def generate_upload_target(self, content_type: Optional[str] = None) -> Dict[str, Any]:
        """
        Mint a write-once upload location in the photo bucket

        Returns:
            {'upload_url', 'storage_id', 'image_url', 'expires_in'}
        """
        storage_id = generate_storage_key()
        expires_in = config.upload_url_expiry

        upload_url = generate_upload_url(self.bucket_name, storage_id, expires_in, content_type)

        return {
            'upload_url': upload_url,
            'storage_id': storage_id,
            'image_url': generate_public_url(self.bucket_name, storage_id),
            'expires_in': expires_in
        }
