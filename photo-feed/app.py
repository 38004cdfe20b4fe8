"""
Photo Feed Lambda Function
Reverse-chronological feed with cursor pagination
"""
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from photostream.decorators import api_gateway_handler
from photostream.services.service_container import get_service
from photostream.utils import create_ok_response


@api_gateway_handler(allowed_methods=['GET'])
def lambda_handler(event, context):
    """
    List one feed page

    Query Parameters:
    - page_size: Items per page (default 20, max 50)
    - cursor: next_cursor from the previous page (optional)

    Examples:
    GET /photos?page_size=10
    GET /photos?page_size=10&cursor=eyJjcmVhdGVkX2F0Ijp7Ik4iOiIzMDAifX0

    Clients keep paginating while has_more is true and drop items whose
    photo_id they already display before appending a page.
    """
    query_params = event['query_params']

    page = get_service('photo_service').list_feed(
        page_size=query_params.get('page_size'),
        cursor=query_params.get('cursor')
    )

    return create_ok_response(
        page,
        event,
        metadata={
            'returned': len(page['items']),
            'has_more': page['has_more']
        },
        function_name='photo-feed'
    )
