"""
Upload URL Lambda Function
Hands out a presigned S3 PUT target for a new photo
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(allowed_methods=['POST', 'GET'])
def lambda_handler(event, context):
    """
    POST /uploads

    Optional body: {"content_type": "image/png"}

    The client PUTs the bytes to upload_url, then calls photo-upload with
    storage_id and image_url.
    """
    content_type = event['parsed_body'].get('content_type')

    target = get_service('photo_service').generate_upload_target(content_type=content_type)

    return create_ok_response(target, event, function_name='upload-url')
