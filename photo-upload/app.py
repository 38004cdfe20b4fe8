"""
Photo Upload Lambda Function
Records a photo whose bytes were already PUT to the upload URL
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.constants import HTTPConstants
from photostream.decorators import api_gateway_handler
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(
    required_fields=['image_url', 'storage_id', 'user_id'],
    allowed_methods=['POST']
)
def lambda_handler(event, context):
    """
    Create a photo record

    Expected request body:
    {
        "image_url": "https://bucket.s3.amazonaws.com/uploads/...",
        "storage_id": "uploads/20240101_120000_ab12...",
        "user_id": "user_k3j9x0a1b",
        "username": "alice",          # optional, falls back to the saved profile
        "user_avatar": "https://..."  # optional
    }
    """
    body = event['parsed_body']
    user_id = body['user_id']

    # Display metadata is copied onto the photo now and never re-joined
    username = body.get('username')
    if not username:
        username = get_service('user_service').resolve_username(user_id)

    photo_id = get_service('photo_service').create_photo(
        image_url=body['image_url'],
        storage_id=body['storage_id'],
        user_id=user_id,
        username=username,
        user_avatar=body.get('user_avatar')
    )

    return create_ok_response(
        {'photo_id': photo_id},
        event,
        status_code=HTTPConstants.CREATED,
        function_name='photo-upload'
    )
