"""
Photo Delete Lambda Function
Owner-only deletion of a photo record and its stored bytes
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.exceptions import ValidationError
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(required_path_params=['photo_id'], allowed_methods=['DELETE', 'POST'])
def lambda_handler(event, context):
    """
    DELETE /photos/{photo_id}

    The caller identifies itself with user_id in the body or the query
    string. Only the uploader may delete; others get 403.
    """
    photo_id = event['path_params']['photo_id']
    user_id = event['parsed_body'].get('user_id') or event['query_params'].get('user_id')
    if not user_id:
        raise ValidationError('user_id is required', field='user_id')

    result = get_service('photo_service').delete_photo(photo_id, user_id)

    metadata = None
    if not result['blob_released']:
        metadata = {'warning': 'Photo deleted but stored image could not be released'}

    return create_ok_response(result, event, metadata=metadata, function_name='photo-delete')
